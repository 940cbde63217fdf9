"""
Validation utilities for the Student Performance Tracker
"""

import math
import numbers

def validate_text(value, field_name="Name"):
    """Validate a required text field"""
    if not isinstance(value, str) or len(value.strip()) == 0:
        return False, f"{field_name} is required"

    if len(value) > 100:
        return False, f"{field_name} must be 100 characters or less"

    return True, f"Valid {field_name.lower()}"

def validate_roll_number(roll_number):
    """Validate student roll number"""
    if not isinstance(roll_number, str) or len(roll_number.strip()) == 0:
        return False, "Roll number is required"

    if len(roll_number) > 20:
        return False, "Roll number must be 20 characters or less"

    return True, "Valid roll number"

def parse_age(age):
    """Parse age into a positive integer; returns (ok, value_or_message)"""
    if isinstance(age, bool):
        return False, "Age must be a whole number"
    try:
        age_int = int(str(age).strip()) if not isinstance(age, int) else age
    except (ValueError, TypeError):
        return False, "Age must be a whole number"

    if age_int <= 0:
        return False, "Age must be a positive number"

    return True, age_int

def parse_score(score):
    """Parse a mark into a float; range is deliberately not enforced"""
    if isinstance(score, bool):
        return False, "Marks must be a valid number"
    try:
        value = float(score) if isinstance(score, numbers.Real) else float(str(score).strip())
    except (ValueError, TypeError):
        return False, "Marks must be a valid number"

    if not math.isfinite(value):
        return False, "Marks must be a valid number"

    return True, value

def validate_attendance_counts(add_present, add_total):
    """Validate attendance increments"""
    for value, label in ((add_present, "Classes attended"), (add_total, "Classes held")):
        if isinstance(value, bool) or not isinstance(value, int):
            return False, f"{label} must be a whole number"
        if value < 0:
            return False, f"{label} cannot be negative"

    return True, "Valid attendance"
