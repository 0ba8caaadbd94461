from .orm_table import ORMTableBase, SequencedTableBase
from .typing import ORMTableProtocol, SequencedTableProtocol

__all__ = [
    "ORMTableBase",
    "SequencedTableBase",
    "ORMTableProtocol",
    "SequencedTableProtocol",
]
