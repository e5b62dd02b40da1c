# cache.py


class CacheLine:
    """One storage slot of a set."""

    __slots__ = ("valid", "dirty", "tag", "age")

    def __init__(self, tag=None, valid=False, dirty=False, age=0):
        self.tag = tag
        self.valid = valid
        self.dirty = dirty
        self.age = age

    @classmethod
    def from_access(cls, access):
        # fresh allocation: valid, clean, most recently used
        return cls(tag=access.tag, valid=True, dirty=False, age=0)

    def touch(self):
        self.age += 1

    def __repr__(self):
        if not self.valid:
            return "CacheLine(invalid)"
        return f"CacheLine(tag={self.tag:#x}, dirty={self.dirty}, age={self.age})"


class CacheSet:
    """
    Fixed number of slots sharing one index.
    Ages are only compared within the set: 0 is the most recent access.
    """

    def __init__(self, associativity):
        self.slots = [CacheLine() for _ in range(associativity)]

    def __len__(self):
        return len(self.slots)

    def __getitem__(self, slot):
        return self.slots[slot]

    def find_line(self, tag):
        for i, line in enumerate(self.slots):
            if line.valid and line.tag == tag:
                return i
        return None

    def age_all(self):
        for line in self.slots:
            if line.valid:
                line.touch()

    def is_full(self):
        return all(line.valid for line in self.slots)

    def insert_first_free(self, line):
        for i, slot in enumerate(self.slots):
            if not slot.valid:
                self.slots[i] = line
                return True
        return False

    def oldest_valid_slot(self):
        """
        Slot holding the line with the largest age.
        Equal ages keep the lowest slot index. Only valid on a full set.
        """
        assert self.is_full(), "oldest_valid_slot() called on a set with free slots"
        oldest = None
        for i, line in enumerate(self.slots):
            if oldest is None or line.age > self.slots[oldest].age:
                oldest = i
        return oldest

    def replace(self, slot, line):
        evicted = self.slots[slot]
        self.slots[slot] = line
        return evicted

    def valid_tags(self):
        return [line.tag for line in self.slots if line.valid]


class CacheModel:
    """
    Set-associative cache with LRU replacement, write-back and write-allocate.

    Accesses must already be decoded (tag/index/offset set). With
    reset_age_on_hit=False a hit leaves the matched line's age as it was
    after the set was aged (legacy behaviour): lines
    that keep hitting still grow old and the policy drifts towards FIFO.
    """

    def __init__(self, geometry, reset_age_on_hit=True):
        self.geometry = geometry
        self.reset_age_on_hit = reset_age_on_hit
        self.sets = [CacheSet(geometry.associativity) for _ in range(geometry.num_sets)]
        self.access_count = 0
        self.hit_count = 0
        self.eviction_count = 0
        self.dirty_eviction_count = 0

    def _lookup(self, access):
        cache_set = self.sets[access.index]
        cache_set.age_all()
        slot = cache_set.find_line(access.tag)
        self.access_count += 1
        if slot is None:
            return cache_set, None
        self.hit_count += 1
        line = cache_set[slot]
        if self.reset_age_on_hit:
            line.age = 0
        return cache_set, line

    def _allocate(self, cache_set, access):
        line = CacheLine.from_access(access)
        if cache_set.is_full():
            evicted = cache_set.replace(cache_set.oldest_valid_slot(), line)
            self.eviction_count += 1
            if evicted.dirty:
                self.dirty_eviction_count += 1
        else:
            cache_set.insert_first_free(line)
        return line

    def read(self, access):
        """Returns True on a hit, False on a miss."""
        cache_set, line = self._lookup(access)
        if line is not None:
            return True
        self._allocate(cache_set, access)
        return False

    def write(self, access):
        """
        Returns True on a hit, False on a miss.
        A hit marks the line dirty; a miss allocates a clean line.
        """
        cache_set, line = self._lookup(access)
        if line is not None:
            line.dirty = True
            return True
        self._allocate(cache_set, access)
        return False

    def access(self, access):
        if access.is_write:
            return self.write(access)
        return self.read(access)

    def line_for(self, access):
        cache_set = self.sets[access.index]
        slot = cache_set.find_line(access.tag)
        return None if slot is None else cache_set[slot]

    @property
    def miss_count(self):
        return self.access_count - self.hit_count

    @property
    def hit_rate(self):
        if self.access_count == 0:
            return None
        return self.hit_count / self.access_count

    @property
    def miss_rate(self):
        if self.access_count == 0:
            return None
        return self.miss_count / self.access_count

    def stats(self):
        used_lines = sum(len(s.valid_tags()) for s in self.sets)
        dirty_lines = sum(1 for s in self.sets for line in s.slots if line.valid and line.dirty)
        return {
            "cache_size_bytes": self.geometry.total_size,
            "line_size": self.geometry.line_size,
            "associativity": self.geometry.associativity,
            "num_sets": self.geometry.num_sets,
            "used_lines": used_lines,
            "dirty_lines": dirty_lines,
        }
