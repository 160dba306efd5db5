"""Domain entity for the equipment operator shown on inspection reports."""

from dataclasses import dataclass


@dataclass
class OperatorInfo:
    """Company operating the registered equipment."""

    name: str = ""
    address: str = ""
    ico: str = ""  # company registration number
