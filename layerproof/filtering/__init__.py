from .eligibility import filter_eligible, is_valid_for_checking

__all__ = ["filter_eligible", "is_valid_for_checking"]
