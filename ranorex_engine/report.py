"""Parser for Ranorex ``.rxlog.data`` report files."""

import logging
import xml.etree.ElementTree as ET
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from ranorex_engine.errors import ReportParseError

log = logging.getLogger(__name__)

REPORT_DATA_SUFFIX = ".data"


@dataclass(frozen=True, kw_only=True)
class ReportItem:
    """A single logged item of a test activity."""

    category: str
    level: str
    message: str = ""


@dataclass(frozen=True, kw_only=True)
class ParsedReport:
    """Outcome data extracted from a Ranorex report."""

    result: str
    summary: str
    items: Sequence[ReportItem]


def report_data_path(result_file: Path) -> Path:
    """Return the XML data file Ranorex writes next to its ``.rxlog`` file."""
    return result_file.with_name(result_file.name + REPORT_DATA_SUFFIX)


def parse_report(path: Path) -> ParsedReport:
    """Load a report data file and extract result, summary and items.

    Args:
        path: The ``.rxlog.data`` file written by the runner

    Returns:
        The overall result code, the summary text and the report items

    Raises:
        ReportParseError: If the file is missing, is not valid XML, or lacks
            the top-level activity and its result

    """
    try:
        root = ET.parse(path).getroot()
    except FileNotFoundError as e:
        raise ReportParseError(f"Ranorex report not found at {path}") from e
    except (ET.ParseError, OSError) as e:
        raise ReportParseError(f"Unable to read Ranorex report {path}: {e}") from e

    activity = root.find("activity") if root.tag == "report" else None
    if activity is None:
        raise ReportParseError(f"No top-level activity in Ranorex report {path}")

    result = activity.get("result")
    if result is None:
        raise ReportParseError(f"Top-level activity in {path} has no result")

    error_messages = ["".join(e.itertext()) for e in root.iter("errmsg")]
    summary = "".join(f"{m}\n" for m in error_messages) if error_messages else result

    items = [
        _to_report_item(element, path)
        for root_activity in root.findall("activity[@type='root']")
        for element in iter_activity_items(root_activity)
    ]
    log.debug("Parsed report %s: result=%s items=%d", path, result, len(items))

    return ParsedReport(result=result, summary=summary, items=items)


def iter_activity_items(root_activity: ET.Element) -> Sequence[ET.Element]:
    """Return items of activities nested below ``root_activity``.

    Items sitting directly on the root activity are not steps. The result is
    in document order, also when activities are nested in each other.
    """
    parents = {child: parent for parent in root_activity.iter() for child in parent}
    return [
        item
        for item in root_activity.iter("item")
        if parents[item] is not root_activity and parents[item].tag == "activity"
    ]


def _to_report_item(element: ET.Element, path: Path) -> ReportItem:
    category = element.get("category")
    level = element.get("level")
    if category is None or level is None:
        raise ReportParseError(f"Report item without category or level in {path}")

    message = element.find("message")
    return ReportItem(
        category=category,
        level=level,
        message="".join(message.itertext()) if message is not None else "",
    )
