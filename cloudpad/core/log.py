import logging
import sys


def configure_logging(level: str = "INFO") -> None:
    """Logs vers stdout, une seule fois par process."""
    root = logging.getLogger()
    if any(getattr(h, "_cloudpad", False) for h in root.handlers):
        root.setLevel(level)
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    handler._cloudpad = True  # type: ignore[attr-defined]
    root.addHandler(handler)
    root.setLevel(level)
