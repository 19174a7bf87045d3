"""Reading and filling in the text slots of the profile SVG cards."""

from __future__ import annotations

import json
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Any, Sequence

# Index of each value's <tspan> in document order.
_REPO_SLOT = 34
_CONTRIB_SLOT = 36
_STAR_SLOT = 38
_COMMIT_SLOT = 40
_ISSUES_SLOT = 42
_PULLS_SLOT = 44
_LOC_NET_SLOT = 46
_LOC_ADD_SLOT = 47
_LOC_DEL_SLOT = 48


def _local_name(tag: Any) -> str:
    if not isinstance(tag, str):
        return ""
    return tag.rsplit("}", 1)[-1]


def _register_namespaces(filename: str | Path) -> None:
    for _event, (prefix, uri) in ET.iterparse(filename, events=("start-ns",)):
        ET.register_namespace(prefix, uri)


def _own_text(element: ET.Element) -> str:
    pieces = [element.text or ""]
    pieces.extend(child.tail or "" for child in element)
    return "".join(pieces)


def _set_text(element: ET.Element, text: str) -> None:
    for child in list(element):
        element.remove(child)
    element.text = text


def _json_text(stats: Any, section: str) -> str:
    value = None
    if isinstance(stats, dict):
        inner = stats.get(section)
        if isinstance(inner, dict):
            value = inner.get("totalCount")
    return json.dumps(value)


def collect_tspans(root: ET.Element) -> list[ET.Element]:
    """Return every <tspan> below root, in document order."""
    return [
        element
        for element in root.iter()
        if element is not root and _local_name(element.tag) == "tspan"
    ]


def svg_overwrite(
    filename: str | Path,
    commit_data: str,
    star_data: str,
    repo_data: str,
    contrib_data: str,
    stats_data: Any,
    loc_data: Sequence[str],
) -> None:
    """Write the statistics into their <tspan> slots and save the SVG in place."""
    _register_namespaces(filename)
    tree = ET.parse(filename)
    tspans = collect_tspans(tree.getroot())
    if len(tspans) <= _LOC_DEL_SLOT:
        raise ValueError(f"Not enough <tspan> elements: found {len(tspans)}")

    values = {
        _REPO_SLOT: repo_data,
        _CONTRIB_SLOT: contrib_data,
        _STAR_SLOT: star_data,
        _COMMIT_SLOT: commit_data,
        _ISSUES_SLOT: _json_text(stats_data, "issues"),
        _PULLS_SLOT: _json_text(stats_data, "pullRequests"),
        _LOC_NET_SLOT: loc_data[2],
        _LOC_ADD_SLOT: f"{loc_data[0]}++",
        _LOC_DEL_SLOT: f"{loc_data[1]}--",
    }
    for slot, text in values.items():
        _set_text(tspans[slot], text)

    tree.write(filename, encoding="utf-8", xml_declaration=True)


def svg_element_getter(filename: str | Path) -> list[str]:
    """Print and return the text of every <tspan> in the SVG, in order."""
    print(f"Does this file exists? {filename}")
    root = ET.parse(filename).getroot()
    texts = [
        _own_text(element)
        for element in root.iter()
        if _local_name(element.tag) == "tspan"
    ]
    for index, text in enumerate(texts):
        print(f"{index}: {text}")
    return texts