def format_compact(value: float) -> str:
    """1234 -> '1.2k', 2_500_000 -> '2.5M', 999 -> '999'."""
    if value >= 1_000_000:
        return f"{value / 1_000_000:.1f}M"
    if value >= 1_000:
        return f"{value / 1_000:.1f}k"
    return str(int(value)) if float(value).is_integer() else str(value)
