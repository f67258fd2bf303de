import logging

# Topic loggers live under "rmap.<topic>".
TOPICS = {"main", "config", "scan", "boundary", "output"}

LEVEL_COLORS = {
    logging.DEBUG: "\033[38;5;252m",  # Light Grey
    logging.INFO: "\033[38;5;111m",  # Pastel Blue
    logging.WARNING: "\033[38;5;229m",  # Pale Yellow
    logging.ERROR: "\033[38;5;210m",  # Soft Red
    logging.CRITICAL: "\033[38;5;217m",  # Light Magenta
}
BOLD = "\033[1m"
RESET = "\033[0m"


class RichLogFormatter(logging.Formatter):
    """Prefixes every line with an aligned 'LEVEL:topic:' tag, optionally colored.

    Multi-line messages (such as the missing-region report) keep the prefix on
    each line so they stay aligned with the rest of the scan output.
    """

    def __init__(self, use_color=False):
        super().__init__()
        self.use_color = use_color

    def _prefix(self, record) -> str:
        level_name = record.levelname[:5]
        topic = record.name.split(".")[-1][:8]
        if not self.use_color:
            return f"{level_name:<5}:{topic:<8}: "
        color = LEVEL_COLORS.get(record.levelno, RESET)
        return f"{color}{level_name:<5}{RESET}:{BOLD}{topic:<8}{RESET}: "

    def format(self, record):
        prefix = self._prefix(record)
        return "\n".join(prefix + line for line in super().format(record).split("\n"))


def resolve_topics(debug_topics: str) -> set:
    """Expands a comma-separated topic list (prefixes allowed) into full topic names."""
    user_topics = [t.strip() for t in debug_topics.split(",") if t.strip()]
    if "all" in user_topics:
        return set(TOPICS)
    return {full for u in user_topics for full in TOPICS if full.startswith(u)}


def setup_logging(level, color_logs=False, debug_topics=None, log_file=None) -> logging.Logger:
    """Configures the 'rmap' logger tree and returns its root."""
    root_logger = logging.getLogger("rmap")
    for h in root_logger.handlers[:]:
        root_logger.removeHandler(h)
        h.close()

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(RichLogFormatter(use_color=color_logs))
    root_logger.addHandler(console_handler)
    root_logger.setLevel(level)

    if log_file:
        try:
            file_handler = logging.FileHandler(log_file, mode="w")
            file_handler.setFormatter(RichLogFormatter(use_color=False))
            root_logger.addHandler(file_handler)
            logging.getLogger("rmap.main").info("Logging to file: %s", log_file)
        except IOError as e:
            root_logger.error("Could not open log file %s: %s", log_file, e)

    # Topic levels from an earlier call would otherwise outlive this one.
    enabled = resolve_topics(debug_topics) if debug_topics else set()
    for topic in TOPICS:
        logging.getLogger(f"rmap.{topic}").setLevel(
            logging.DEBUG if topic in enabled else logging.NOTSET
        )
    return root_logger
