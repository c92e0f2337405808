"""Plain-text rendering of unit help. Returns strings, never prints."""

from typing import List

from .interfaces import UnitLike


def format_capability_lines(unit: UnitLike) -> List[str]:
    lines = []
    for name in unit.get_capabilities():
        tool = unit.get_schema(name)
        if tool is None:
            lines.append(f"  {name}")
            continue
        params = ", ".join(
            f"{param}{'' if param in (tool.parameters.required or []) else '?'}: {prop.type}"
            for param, prop in tool.parameters.properties.items()
        )
        returns = f" -> {tool.response.type}" if tool.response else ""
        lines.append(f"  {name}({params}){returns}  {tool.description}")
    return lines


def format_help(unit: UnitLike) -> str:
    """Describe a unit's identity and capabilities."""
    dna = unit.dna
    lines = [
        f"{type(unit).__name__} Help:",
        f"- ID: {dna.id}",
        f"- Version: {dna.version}",
    ]
    if dna.description:
        lines.append(f"- Description: {dna.description}")
    if dna.parent is not None:
        lines.append(f"- Evolved from: {dna.parent.id}@{dna.parent.version}")

    capability_lines = format_capability_lines(unit)
    lines.append(f"- Capabilities ({len(capability_lines)}):")
    lines.extend(capability_lines or ["  none"])
    return "\n".join(lines)
