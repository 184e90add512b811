import os

HOME = os.path.expanduser("~")
XDG_CONFIG_HOME = os.environ.get("XDG_CONFIG_HOME")
CONFIG_HOME = XDG_CONFIG_HOME if XDG_CONFIG_HOME else os.path.join(HOME, ".config")
CONFIG_DIR = os.path.join(CONFIG_HOME, "scroll")
CONFIG_JSON = os.path.join(CONFIG_DIR, "config.json")
LOG_PATH = os.path.join(CONFIG_DIR, "scroll.log")

# default settings
BATCH_SIZE_DEFAULT = 256
ENCODING_DEFAULT = "utf-8"
ENCODING_ERRORS_DEFAULT = "strict"
TAB_WIDTH_DEFAULT = 8
LOG_LEVEL_DEFAULT = "WARNING"

ENCODING_ERRORS_CHOICES = {"strict", "replace", "ignore", "backslashreplace"}
LOG_LEVEL_CHOICES = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def ensure_config_dirs():
    os.makedirs(CONFIG_DIR, exist_ok=True)


def _positive_int(value):
    # bool is an int subclass; reject it explicitly
    if isinstance(value, int) and not isinstance(value, bool) and value >= 1:
        return value
    return None


def _line_encoding(name):
    """Return the codec name if lines can be split on b"\\n" before decoding."""
    import codecs

    try:
        codec = codecs.lookup(name).name
        # rejects utf-16/utf-32 and EBCDIC code pages
        if "\n~".encode(codec) != b"\n~":
            return None
    except (LookupError, UnicodeError):
        return None
    return codec

def load_config():
    cfg = {
        "BATCH_SIZE": BATCH_SIZE_DEFAULT,
        "ENCODING": ENCODING_DEFAULT,
        "ENCODING_ERRORS": ENCODING_ERRORS_DEFAULT,
        "TAB_WIDTH": TAB_WIDTH_DEFAULT,
        "LOG_LEVEL": LOG_LEVEL_DEFAULT,
    }

    if os.path.exists(CONFIG_JSON):
        try:
            import json

            with open(CONFIG_JSON, "r", encoding="utf-8") as f:
                data = json.load(f)
            if isinstance(data, dict):
                batch_size = _positive_int(data.get("batch_size"))
                if batch_size is not None:
                    cfg["BATCH_SIZE"] = batch_size

                encoding = data.get("encoding")
                if isinstance(encoding, str) and encoding.strip():
                    codec = _line_encoding(encoding.strip())
                    if codec is not None:
                        cfg["ENCODING"] = codec

                errors = data.get("encoding_errors")
                if errors in ENCODING_ERRORS_CHOICES:
                    cfg["ENCODING_ERRORS"] = errors

                tab_width = _positive_int(data.get("tab_width"))
                if tab_width is not None:
                    cfg["TAB_WIDTH"] = tab_width

                level = data.get("log_level")
                if isinstance(level, str) and level.upper() in LOG_LEVEL_CHOICES:
                    cfg["LOG_LEVEL"] = level.upper()
        except Exception:
            pass

    return cfg
