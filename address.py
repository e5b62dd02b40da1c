# address.py
import math

from errors import ConfigError, ParseError

ADDRESS_BITS = 32
LAYOUTS = ("standard", "legacy")


def _is_power_of_two(n):
    return isinstance(n, int) and not isinstance(n, bool) and n > 0 and (n & (n - 1)) == 0


class CacheGeometry:
    """
    Static shape of the cache and the address field widths derived from it.

    The "standard" layout splits an address into tag | index | offset with
    index_bits = log2(num_sets). The "legacy" layout keeps the older
    field widths: index_bits = log2(total_size)
    and tag_bits = 32 - index_bits + log2(associativity).
    """

    __slots__ = ("associativity", "line_size", "total_size", "address_layout",
                 "num_sets", "offset_bits", "index_bits", "tag_bits")

    def __init__(self, associativity, line_size, total_size, address_layout="standard"):
        for name, value in (("associativity", associativity),
                            ("line size", line_size),
                            ("total size", total_size)):
            if not _is_power_of_two(value):
                raise ConfigError(f"{name} must be a positive power of two, got {value!r}")
        if address_layout not in LAYOUTS:
            raise ConfigError(f"unknown address layout {address_layout!r}, expected one of {LAYOUTS}")
        if total_size % (associativity * line_size):
            raise ConfigError(
                f"total size {total_size} is not divisible by associativity x line size "
                f"({associativity} x {line_size})")
        num_sets = total_size // (associativity * line_size)
        if num_sets < 1:
            raise ConfigError("cache must hold at least one set")

        offset_bits = int(math.log2(line_size))
        if address_layout == "standard":
            index_bits = int(math.log2(num_sets))
            if offset_bits + index_bits > ADDRESS_BITS:
                raise ConfigError(f"cache is too large for {ADDRESS_BITS}-bit addresses")
            tag_bits = ADDRESS_BITS - index_bits - offset_bits
        else:
            index_bits = int(math.log2(total_size))
            tag_bits = min(ADDRESS_BITS, ADDRESS_BITS - index_bits + int(math.log2(associativity)))

        object.__setattr__(self, "associativity", associativity)
        object.__setattr__(self, "line_size", line_size)
        object.__setattr__(self, "total_size", total_size)
        object.__setattr__(self, "address_layout", address_layout)
        object.__setattr__(self, "num_sets", num_sets)
        object.__setattr__(self, "offset_bits", offset_bits)
        object.__setattr__(self, "index_bits", index_bits)
        object.__setattr__(self, "tag_bits", tag_bits)

    def __setattr__(self, name, value):
        raise AttributeError("CacheGeometry is immutable")

    def __eq__(self, other):
        if not isinstance(other, CacheGeometry):
            return NotImplemented
        return self.describe() == other.describe()

    def __hash__(self):
        return hash(tuple(sorted(self.describe().items())))

    def __repr__(self):
        return (f"CacheGeometry(associativity={self.associativity}, line_size={self.line_size}, "
                f"total_size={self.total_size}, address_layout={self.address_layout!r})")

    @property
    def num_lines(self):
        return self.num_sets * self.associativity

    def decompose(self, address):
        return decompose(address, self)

    def describe(self):
        return {
            "associativity": self.associativity,
            "line_size": self.line_size,
            "total_size": self.total_size,
            "address_layout": self.address_layout,
            "num_sets": self.num_sets,
            "offset_bits": self.offset_bits,
            "index_bits": self.index_bits,
            "tag_bits": self.tag_bits,
        }


def _field(address, start, width):
    # bits [start, start + width) of the address, counting from the MSB
    end = min(ADDRESS_BITS, start + width)
    start = max(0, start)
    if end <= start:
        return 0
    return (address >> (ADDRESS_BITS - end)) & ((1 << (end - start)) - 1)


def raw_index(address, geometry):
    """Index field before it is reduced into [0, num_sets)."""
    return _field(address, ADDRESS_BITS - geometry.offset_bits - geometry.index_bits,
                  geometry.index_bits)


def decompose(address, geometry):
    """
    Split a 32-bit address into (tag, index, offset) for the given geometry.
    The index is reduced modulo num_sets, which is a no-op for the standard layout.
    """
    if not isinstance(address, int) or not 0 <= address < (1 << ADDRESS_BITS):
        raise ParseError(f"address {address!r} is not a {ADDRESS_BITS}-bit value")
    offset = _field(address, ADDRESS_BITS - geometry.offset_bits, geometry.offset_bits)
    index = raw_index(address, geometry) % geometry.num_sets
    tag = _field(address, 0, geometry.tag_bits)
    return tag, index, offset


def compose(tag, index, offset, geometry):
    """Inverse of decompose() for the standard layout."""
    return ((tag << (geometry.index_bits + geometry.offset_bits))
            | (index << geometry.offset_bits)
            | offset)
