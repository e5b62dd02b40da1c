# report.py


def _rate(value):
    if value is None:
        return "no accesses recorded"
    return f"{value:.5g}"


def format_header(geometry):
    return [
        f"Total Cache Size:  {geometry.total_size}B",
        f"Line Size:  {geometry.line_size}B",
        f"Set Size:  {geometry.associativity}",
        f"Number of Sets:  {geometry.num_sets}",
    ]


def format_trace(result):
    lines = [
        f"{'RefNum':<8}{'  R/W':<10}{'Address':<13}{'Tag':<6}{'Index':<8}{'Offset':<10}{'H/M':<8}",
        "*" * 63,
    ]
    for ref_num, (access, hit) in enumerate(zip(result.trace, result.outcomes)):
        lines.append(
            f"   {ref_num:<5}{access.operation:<8}  {access.address_hex}"
            f"{access.tag:>7x}{access.index:>8x}{access.offset:>8d}"
            f"{'Hit' if hit else 'Miss':>10}"
        )
    return lines


def format_summary(result):
    return [
        "    Simulation Summary",
        "*" * 26,
        f"Total Hits:\t{result.hit_count}",
        f"Total Misses:\t{result.miss_count}",
        f"Hit Rate:\t{_rate(result.hit_rate)}",
        f"Miss Rate:\t{_rate(result.miss_rate)}",
    ]


def render(result):
    """Full text report: cache shape, one row per reference, then the summary."""
    lines = format_header(result.geometry) + [""]
    lines += format_trace(result)
    lines += [""] + format_summary(result)
    return "\n".join(lines) + "\n"
