"""Date utilities."""

from datetime import date


def calculate_age(birth_date: date, end_date: date | None = None) -> int:
    """Calculate age in whole years.

    Args:
        birth_date: Date of birth
        end_date: Date the age is measured at (date of death); today when omitted

    Returns:
        Age in years

    Examples:
        >>> calculate_age(date(1903, 6, 25), date(1950, 1, 21))
        46
    """
    if not birth_date:
        return 0

    end_date = end_date or date.today()
    age = end_date.year - birth_date.year

    if (end_date.month, end_date.day) < (birth_date.month, birth_date.day):
        age -= 1

    return age
