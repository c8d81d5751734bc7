# announcements.py
"""Caller phrases for drawn numbers."""

ANNOUNCEMENTS = {
    1: "Kelly's Eye, Number One",
    2: "One Little Duck, Number Two",
    3: "Cup of Tea, Number Three",
    4: "Knock at the Door, Number Four",
    5: "Man Alive, Number Five",
    6: "Tom Mix, Number Six",
    7: "Lucky Seven",
    8: "Garden Gate, Number Eight",
    9: "Doctor's Orders, Number Nine",
    10: "Prime Minister's Den, Number Ten",
    11: "Legs Eleven",
    12: "One Dozen, Number Twelve",
    13: "Unlucky for Some, Thirteen",
    14: "Valentine's Day, Fourteen",
    15: "Young and Keen, Fifteen",
    16: "Sweet Sixteen",
    17: "Dancing Queen, Seventeen",
    18: "Coming of Age, Eighteen",
    19: "Goodbye Teens, Nineteen",
    20: "One Score, Twenty",
    21: "Royal Salute, Twenty One",
    22: "Two Little Ducks, Twenty Two",
    30: "Dirty Gerdie, Thirty",
    33: "All the Threes, Thirty Three",
    40: "Life Begins at Forty",
    44: "All the Fours, Forty Four",
    50: "Half Century, Fifty",
    55: "Snakes Alive, Fifty Five",
    60: "Three Score, Sixty",
    66: "Clickety Click, Sixty Six",
    70: "Three Score and Ten, Seventy",
    77: "Sunset Strip, Seventy Seven",
    80: "Eight and Blank, Eighty",
    88: "Two Fat Ladies, Eighty Eight",
    90: "Top of the Shop, Ninety",
}


def announcement_for(number: int) -> str:
    return ANNOUNCEMENTS.get(number, f"Number {number}")
