# tracefile.py
import re

from errors import TraceParseError

OPERATIONS = {"R": "Read", "W": "Write"}
_HEX_RE = re.compile(r"^[0-9a-fA-F]{1,8}$")


class Access:
    """
    One memory reference from the trace.
    tag/index/offset stay None until decode() returns a decoded copy.
    """

    def __init__(self, operation, ref_size, address, line_number=None):
        self.operation = operation
        self.ref_size = ref_size
        self.address = address
        self.line_number = line_number
        self.tag = None
        self.index = None
        self.offset = None

    @property
    def address_hex(self):
        return f"{self.address:08x}"

    @property
    def is_write(self):
        return self.operation == "Write"

    def decode(self, geometry):
        decoded = Access(self.operation, self.ref_size, self.address, self.line_number)
        decoded.tag, decoded.index, decoded.offset = geometry.decompose(self.address)
        return decoded

    def __repr__(self):
        return f"Access({self.operation!r}, {self.ref_size}, 0x{self.address_hex})"


def parse_trace_line(line, line_number=None, path=None):
    """Parse one `<R|W>:<size>:<hexaddr>` record into an Access."""
    fields = [f.strip() for f in line.strip().split(":")]
    if len(fields) != 3:
        raise TraceParseError(f"expected <op>:<size>:<address>, got {line.strip()!r}",
                              path, line_number)
    op, size, addr = fields

    operation = OPERATIONS.get(op.upper())
    if operation is None:
        raise TraceParseError(f"unknown access type {op!r} (expected R or W)", path, line_number)

    if not size.isdecimal() or int(size) <= 0:
        raise TraceParseError(f"reference size must be a positive integer, got {size!r}",
                              path, line_number)

    if not _HEX_RE.match(addr):
        raise TraceParseError(f"address must be 1 to 8 hex digits, got {addr!r}", path, line_number)

    return Access(operation, int(size), int(addr.zfill(8), 16), line_number)


def parse_trace(lines, path=None):
    trace = []
    for line_number, line in enumerate(lines, start=1):
        if not line.strip():
            continue
        trace.append(parse_trace_line(line, line_number, path))
    return trace


def _text_lines(f, path):
    for line_number, raw in enumerate(f, start=1):
        try:
            yield raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise TraceParseError(f"line is not valid UTF-8 text: {e.reason}", path, line_number) from e


def load_trace(path):
    try:
        with open(path, "rb") as f:
            return parse_trace(_text_lines(f, path), path)
    except OSError as e:
        raise TraceParseError(f"cannot read trace file: {e.strerror}", path) from e
