"""Administrative listing of reference pair definitions."""

from reference.definition import ReferencePairDefinition

HEADER = {
    'label': 'Label',
    'id': 'Machine name',
    'fields': 'Corresponding fields',
    'enabled': 'Enabled',
}


def build_header() -> dict[str, str]:
    return dict(HEADER)


def build_row(definition: ReferencePairDefinition) -> dict[str, str]:
    return {
        'label': definition.label,
        'id': definition.id,
        'fields': ', '.join(definition.corresponding_fields()),
        'enabled': 'Yes' if definition.enabled else 'No',
    }


def build_rows(definitions: list[ReferencePairDefinition]) -> list[dict[str, str]]:
    """Rows sorted by label, then machine name."""
    return [build_row(d) for d in sorted(definitions, key=lambda d: (d.label.lower(), d.id))]


def render_table(definitions: list[ReferencePairDefinition]) -> str:
    """Plain-text table for the plugin's list task."""
    header = build_header()
    rows = build_rows(definitions)
    widths = {
        key: max([len(title)] + [len(row[key]) for row in rows])
        for key, title in header.items()
    }

    lines = [
        '  '.join(header[key].ljust(widths[key]) for key in header).rstrip(),
        '  '.join('-' * widths[key] for key in header),
    ]
    for row in rows:
        lines.append('  '.join(row[key].ljust(widths[key]) for key in header).rstrip())
    return '\n'.join(lines)
