"""Domain policies package."""

from .interest import CashInterestPolicy, InterestPolicy, NoInterestPolicy

__all__ = ["CashInterestPolicy", "InterestPolicy", "NoInterestPolicy"]
