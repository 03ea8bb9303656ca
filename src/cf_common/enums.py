"""Global enums — must match DB CHECK constraints exactly."""

from enum import Enum


class DepositStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
