"""
Cell predicate evaluation for the scheme ruleset

A ruleset cell carries no explicit operator. Its meaning is inferred from the
cell text (and, for bare numbers, from the column header) by trying a fixed
chain of detectors. The first detector that applies decides the outcome.
"""
import logging
import operator
import re
from typing import Any, Callable, List, NamedTuple, Optional, Tuple

from .utils.normalizers import parse_numeric

logger = logging.getLogger(__name__)

RANGE_PATTERN = re.compile(r'^\s*(-?\d+(?:\.\d+)?)\s*-\s*(-?\d+(?:\.\d+)?)\s*$')
COMPARISON_PATTERN = re.compile(r'^(<=|>=|<|>)\s*([0-9,.\s₹]+)$')
UPPER_BOUND_HEADER = re.compile(r'max|upper|<=', re.IGNORECASE)
LOWER_BOUND_HEADER = re.compile(r'min|lower|>=', re.IGNORECASE)
BOOLEAN_PATTERN = re.compile(r'^(yes|no|true|false)$', re.IGNORECASE)
WILDCARDS = {"any", "-"}


class CellOperands(NamedTuple):
    """Trimmed text and parsed numbers for one cell/answer pair"""
    cell: str
    answer: str
    header: str
    cell_number: Optional[float]
    answer_number: Optional[float]

    @classmethod
    def build(cls, cell: Any, answer: Any, header: Any) -> "CellOperands":
        cell_text = "" if cell is None else str(cell).strip()
        answer_text = "" if answer is None else str(answer).strip()
        return cls(
            cell=cell_text,
            answer=answer_text,
            header="" if header is None else str(header),
            cell_number=parse_numeric(cell_text),
            answer_number=parse_numeric(answer_text)
        )


class CellOutcome(NamedTuple):
    """Which detector decided a cell, and its verdict"""
    kind: str
    matched: bool


Detector = Callable[[CellOperands], Optional[bool]]


class CellMatcher:
    """Infers and evaluates the predicate expressed by a single ruleset cell"""

    COMPARISON_OPERATORS = {
        "<=": operator.le,
        ">=": operator.ge,
        "<": operator.lt,
        ">": operator.gt
    }

    @staticmethod
    def _empty_cell(ops: CellOperands) -> Optional[bool]:
        return True if ops.cell == "" else None

    @staticmethod
    def _wildcard(ops: CellOperands) -> Optional[bool]:
        return True if ops.cell.lower() in WILDCARDS else None

    @staticmethod
    def _missing_answer(ops: CellOperands) -> Optional[bool]:
        # Unanswered questions are not held against the farmer
        return True if ops.answer == "" else None

    @staticmethod
    def _range(ops: CellOperands) -> Optional[bool]:
        """Inclusive "low-high" interval, e.g. "10-50" or "-5-5" """
        match = RANGE_PATTERN.match(ops.cell)
        if not match:
            return None
        if ops.answer_number is None:
            logger.debug(f"Answer '{ops.answer}' is not numeric for range '{ops.cell}'")
            return False
        low, high = float(match.group(1)), float(match.group(2))
        return low <= ops.answer_number <= high

    @staticmethod
    def _comparison(ops: CellOperands) -> Optional[bool]:
        """Operator-prefixed bound, e.g. "<=5" or ">= ₹10,000" """
        match = COMPARISON_PATTERN.match(ops.cell)
        if not match:
            return None
        limit = parse_numeric(match.group(2))
        if ops.answer_number is None or limit is None:
            logger.debug(f"Cannot compare '{ops.answer}' against '{ops.cell}'")
            return False
        compare = CellMatcher.COMPARISON_OPERATORS[match.group(1)]
        return compare(ops.answer_number, limit)

    @staticmethod
    def _upper_bound_header(ops: CellOperands) -> Optional[bool]:
        """Bare number under a "max"/"upper" column is a ceiling"""
        if not UPPER_BOUND_HEADER.search(ops.header):
            return None
        if ops.cell_number is None or ops.answer_number is None:
            return None
        return ops.answer_number <= ops.cell_number

    @staticmethod
    def _lower_bound_header(ops: CellOperands) -> Optional[bool]:
        """Bare number under a "min"/"lower" column is a floor"""
        if not LOWER_BOUND_HEADER.search(ops.header):
            return None
        if ops.cell_number is None or ops.answer_number is None:
            return None
        return ops.answer_number >= ops.cell_number

    @staticmethod
    def _numeric_equality(ops: CellOperands) -> Optional[bool]:
        if ops.cell_number is None or ops.answer_number is None:
            return None
        return ops.answer_number == ops.cell_number

    @staticmethod
    def _membership(ops: CellOperands) -> Optional[bool]:
        if "," not in ops.cell:
            return None
        options = [option.strip().lower() for option in ops.cell.split(",")]
        return ops.answer.lower() in options

    @staticmethod
    def _boolean(ops: CellOperands) -> Optional[bool]:
        if not (BOOLEAN_PATTERN.match(ops.cell) and BOOLEAN_PATTERN.match(ops.answer)):
            return None
        return ops.cell.lower() == ops.answer.lower()

    @staticmethod
    def _substring(ops: CellOperands) -> Optional[bool]:
        cell, answer = ops.cell.lower(), ops.answer.lower()
        return True if cell in answer or answer in cell else None

    @staticmethod
    def _exact(ops: CellOperands) -> Optional[bool]:
        return ops.cell.lower() == ops.answer.lower()

    # Order matters: earlier detectors shadow later, more general ones
    DETECTORS: List[Tuple[str, Detector]] = [
        ("empty_cell", _empty_cell.__func__),
        ("wildcard", _wildcard.__func__),
        ("missing_answer", _missing_answer.__func__),
        ("range", _range.__func__),
        ("comparison", _comparison.__func__),
        ("upper_bound", _upper_bound_header.__func__),
        ("lower_bound", _lower_bound_header.__func__),
        ("numeric_equality", _numeric_equality.__func__),
        ("membership", _membership.__func__),
        ("boolean", _boolean.__func__),
        ("substring", _substring.__func__),
        ("exact", _exact.__func__)
    ]

    @staticmethod
    def evaluate_cell(cell: Any, answer: Any, header: Any = "") -> CellOutcome:
        """
        Evaluate one ruleset cell against one farmer answer

        Args:
            cell: Raw cell value from the ruleset
            answer: Farmer's raw answer for the same column (may be missing)
            header: Column label, consulted by the bound heuristics

        Returns:
            CellOutcome naming the deciding detector and whether it passed
        """
        ops = CellOperands.build(cell, answer, header)
        for kind, detector in CellMatcher.DETECTORS:
            verdict = detector(ops)
            if verdict is not None:
                return CellOutcome(kind, verdict)
        return CellOutcome("exact", False)  # unreachable, _exact always applies

    @staticmethod
    def match_cell(cell: Any, answer: Any, header: Any = "") -> bool:
        """Return True when the farmer's answer satisfies the cell"""
        return CellMatcher.evaluate_cell(cell, answer, header).matched


match_cell = CellMatcher.match_cell
evaluate_cell = CellMatcher.evaluate_cell
