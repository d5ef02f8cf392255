"""ANSI color codes for terminal output."""


class Colors:
    """ANSI color codes for audit summaries."""

    HEADER = '\033[95m'
    OKGREEN = '\033[92m'
    OKCYAN = '\033[96m'
    WARNING = '\033[93m'
    FAIL = '\033[91m'
    ENDC = '\033[0m'
    BOLD = '\033[1m'

    # Translation status -> color
    STATUS_COLORS = {
        'MISSING': FAIL,
        'STALE': WARNING,
        'CURRENT': OKGREEN,
    }

    # Switched off by --no-color; applies to every helper below
    enabled = True

    @classmethod
    def paint(cls, color: str, text: str) -> str:
        if not cls.enabled or not color:
            return text
        return f"{color}{text}{cls.ENDC}"

    @classmethod
    def success(cls, text: str) -> str:
        return cls.paint(cls.OKGREEN, text)

    @classmethod
    def error(cls, text: str) -> str:
        return cls.paint(cls.FAIL, text)

    @classmethod
    def warning(cls, text: str) -> str:
        return cls.paint(cls.WARNING, text)

    @classmethod
    def info(cls, text: str) -> str:
        return cls.paint(cls.OKCYAN, text)

    @classmethod
    def bold(cls, text: str) -> str:
        return cls.paint(cls.BOLD, text)

    @classmethod
    def status(cls, status: str, text: str = None) -> str:
        """Color ``text`` (default: the status name) by translation status."""
        return cls.paint(cls.STATUS_COLORS.get(status, ''), text if text is not None else status)
