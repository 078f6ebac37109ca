"""XML inventory report."""

import logging
import xml.etree.ElementTree as ET
from collections.abc import Iterable
from datetime import datetime
from pathlib import Path

from direnum.scanner.filesystem import FileSystemEntry, format_attributes

logger = logging.getLogger(__name__)

REPORT_PREFIX = "direnum"
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def report_filename(now: datetime) -> str:
    return f"{REPORT_PREFIX}-{now:%Y-%m-%d-%H-%M}.xml"


def build_report(entries: Iterable[FileSystemEntry]) -> ET.ElementTree:
    root = ET.Element("ArrayOfFileSystemEntries")

    for entry in entries:
        element = ET.SubElement(root, "FileInfo")
        ET.SubElement(element, "FullName").text = entry.path
        ET.SubElement(element, "DirectoryName").text = entry.directory_path
        ET.SubElement(element, "CreationTimeUtc").text = _format_timestamp(entry.created_at)
        ET.SubElement(element, "LastWriteTimeUtc").text = _format_timestamp(entry.modified_at)
        ET.SubElement(element, "Size").text = str(entry.size)
        ET.SubElement(element, "Attributes").text = format_attributes(entry.attributes)

    return ET.ElementTree(root)


def write_report(
    entries: Iterable[FileSystemEntry],
    output_dir: Path,
    now: datetime | None = None,
) -> Path:
    """Write the inventory to a timestamped XML file in ``output_dir``."""
    now = now or datetime.now()
    output_dir.mkdir(parents=True, exist_ok=True)
    report_path = output_dir / report_filename(now)

    tree = build_report(entries)
    ET.indent(tree)
    tree.write(report_path, encoding="utf-8", xml_declaration=True)

    logger.info("Saved report: %s", report_path)
    return report_path


def _format_timestamp(value: datetime | None) -> str:
    if value is None:
        return ""
    return value.strftime(TIMESTAMP_FORMAT)
