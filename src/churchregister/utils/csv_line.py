"""Quote-aware splitting of comma-separated lines."""


def split_csv_line(line: str) -> list[str]:
    """Split a single CSV line on commas that are not inside double quotes.

    Quote characters are dropped from the output and toggle the quoted state,
    so ``a,"b, c",d`` yields ``["a", "b, c", "d"]``. Fields are not trimmed.
    """
    fields = []
    current = []
    in_quotes = False

    for char in line:
        if char == '"':
            in_quotes = not in_quotes
            continue
        if char == "," and not in_quotes:
            fields.append("".join(current))
            current = []
        else:
            current.append(char)

    fields.append("".join(current))
    return fields
