"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

utils/convert_utils.py
Formatting helpers shared by the CLI, the report and the export layer.
"""
import re
import time

BINARY_PREFIXES = "KMGTPE"

# '<number><optional K/M/G/T/P prefix><optional B>', e.g. 500KB, 1.5G, 2048
SIZE_RE = re.compile(r"^(?P<value>-?(?:\d+(?:\.\d*)?|\.\d+))\s*(?P<prefix>[KMGTP]?)B?$")


class ConvertUtils:
    @staticmethod
    def bytes_to_human(size_bytes: int) -> str:
        """1536 -> '1.50KB'. Negative input is shown as '0B'."""
        if size_bytes < 0:
            return "0B"

        value = float(size_bytes)
        unit = "B"
        for prefix in BINARY_PREFIXES:
            if value < 1024:
                break
            value /= 1024
            unit = f"{prefix}B"
        return f"{value:.2f}{unit}"

    @staticmethod
    def human_to_bytes(size_str: str) -> int:
        """
        Parse a size such as '500KB', '1.5G' or '2048' (plain bytes).
        Multipliers are binary: 1K = 1024.

        Raises:
            ValueError: malformed or negative size
        """
        text = size_str.strip().upper()
        match = SIZE_RE.match(text)
        if not match:
            raise ValueError(
                f"Invalid size format: '{size_str}'. Use e.g. 1000, 500KB, 1.5MB or 2G"
            )

        value = float(match.group("value"))
        if value < 0:
            raise ValueError(f"Negative size not allowed: '{size_str}'")

        prefix = match.group("prefix")
        exponent = BINARY_PREFIXES.index(prefix) + 1 if prefix else 0
        return int(value * 1024 ** exponent)

    @staticmethod
    def is_valid_size_format(size_str: str) -> bool:
        try:
            ConvertUtils.human_to_bytes(size_str)
        except ValueError:
            return False
        return True

    @staticmethod
    def timestamp_to_human(timestamp: float, fmt: str = "%Y-%m-%d %H:%M") -> str:
        """Local time; out-of-range values become 'Invalid timestamp'."""
        try:
            return time.strftime(fmt, time.localtime(timestamp))
        except (OverflowError, OSError, ValueError):
            return "Invalid timestamp"

    @staticmethod
    def format_duration(seconds: float) -> str:
        """
        Format a duration: '1h 2m 3s', '1m 5s', '1.500s' or '250ms'.
        """
        total_ms = int(round(seconds * 1000))
        total_seconds, millis = divmod(total_ms, 1000)
        hours, rest = divmod(total_seconds, 3600)
        minutes, secs = divmod(rest, 60)

        if hours > 0:
            return f"{hours}h {minutes}m {secs}s"
        if minutes > 0:
            return f"{minutes}m {secs}s"
        if secs > 0:
            return f"{secs}.{millis:03d}s"
        return f"{millis}ms"

    @staticmethod
    def calculate_percentage(part: int, total: int) -> float:
        if total == 0:
            return 0.0
        return (part / total) * 100.0
