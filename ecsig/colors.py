import os
import sys


# ANSI color codes
class Colors:
    RED = '\033[91m'
    RESET = '\033[0m'


def supports_color(stream=None):
    """Check if the output stream is a terminal that understands ANSI colors."""
    stream = stream or sys.stdout
    if not stream.isatty():
        return False

    if os.environ.get('NO_COLOR'):
        return False

    if os.name == 'nt':
        # Only recent Windows terminals interpret ANSI sequences
        return os.environ.get('ANSICON') is not None or \
            'WT_SESSION' in os.environ or \
            os.environ.get('TERM_PROGRAM') == 'vscode'

    return True


def colored(text, color, stream=None):
    """Apply color to text if the stream supports it."""
    if supports_color(stream):
        return f"{color}{text}{Colors.RESET}"
    return text
