#!/usr/bin/env python3
"""
Memory Profiler Module

Samples allocator statistics around sweep steps and keeps them in an
append-only log that is dumped once at the end of a run as tab-separated
text. Each sample also carries an estimate of the bytes used by the log
itself so consumers can subtract the profiler's own footprint.
"""

import gc
import itertools
import logging
import struct
import sys
import threading
import tracemalloc
from abc import ABC, abstractmethod
from typing import List, NamedTuple, Optional, TextIO

import psutil

from .rw_lock import ReadWriteLock

logger = logging.getLogger(__name__)

DUMP_HEADER = "id\tallocated\tresident\tcorrection"


class MemorySample(NamedTuple):
    """One allocator snapshot."""
    id: int
    allocated: int
    resident: int
    correction: int


_POINTER_SIZE = struct.calcsize('P')
_EMPTY_LIST_SIZE = sys.getsizeof([])


def sample_footprint(sample: MemorySample) -> int:
    """Bytes held by one logged sample: the tuple plus its four int fields."""
    return sys.getsizeof(sample) + sum(sys.getsizeof(value) for value in sample)


# Counters in the 32-bit range stand in for typical ids and byte counts
SAMPLE_FOOTPRINT = sample_footprint(MemorySample(2 ** 31, 2 ** 31, 2 ** 31, 2 ** 31))


def list_capacity(items: list) -> int:
    """Number of slots CPython has allocated for a list, used or not."""
    return (sys.getsizeof(items) - _EMPTY_LIST_SIZE) // _POINTER_SIZE


class AllocatorStatsSource(ABC):
    """Where the profiler reads process memory counters from."""

    @abstractmethod
    def advance_epoch(self):
        """Refresh any cached statistics before they are read."""
        raise NotImplementedError("Subclasses must implement advance_epoch")

    @abstractmethod
    def read_allocated_bytes(self) -> int:
        """Bytes currently allocated by the program."""
        raise NotImplementedError("Subclasses must implement read_allocated_bytes")

    @abstractmethod
    def read_resident_bytes(self) -> int:
        """Bytes of physical memory resident for the process."""
        raise NotImplementedError("Subclasses must implement read_resident_bytes")


class ProcessAllocatorStats(AllocatorStatsSource):
    """
    Allocator statistics of the running interpreter.

    Allocated bytes come from tracemalloc (Python-level allocations, traced
    from the first epoch on), resident bytes from psutil. Each epoch runs a
    garbage collection so the counters only reflect reachable objects.
    """

    def __init__(self):
        self._process = psutil.Process()
        self._started_tracing = False

    def advance_epoch(self):
        if not tracemalloc.is_tracing():
            tracemalloc.start()
            self._started_tracing = True
            logger.debug("Started tracemalloc for allocator statistics")
        gc.collect()

    def read_allocated_bytes(self) -> int:
        if not tracemalloc.is_tracing():
            return 0
        current, _peak = tracemalloc.get_traced_memory()
        return current

    def read_resident_bytes(self) -> int:
        return self._process.memory_info().rss

    def close(self):
        """Stop tracemalloc if this source started it."""
        if self._started_tracing and tracemalloc.is_tracing():
            tracemalloc.stop()
        self._started_tracing = False


class MemoryProfiler:
    """
    Append-only log of memory samples for one run.

    sample() may be called from several threads; ids are handed out
    monotonically and the log is guarded by a reader/writer lock. dump()
    always writes rows sorted by id regardless of append order.
    """

    def __init__(self, stats_source: Optional[AllocatorStatsSource] = None):
        """
        Initialize the profiler.

        Args:
            stats_source: Allocator statistics (the current process if None)
        """
        self.stats_source = stats_source or ProcessAllocatorStats()
        self._samples: List[MemorySample] = []
        self._lock = ReadWriteLock()
        self._ids = itertools.count()
        self._id_lock = threading.Lock()

    def __len__(self):
        with self._lock.read_locked():
            return len(self._samples)

    def sample(self) -> MemorySample:
        """Take one allocator snapshot and append it to the log."""
        self.stats_source.advance_epoch()
        allocated = self.stats_source.read_allocated_bytes()
        resident = self.stats_source.read_resident_bytes()

        with self._lock.read_locked():
            correction = list_capacity(self._samples) * SAMPLE_FOOTPRINT

        with self._id_lock:
            sample_id = next(self._ids)

        sample = MemorySample(sample_id, allocated, resident, correction)
        with self._lock.write_locked():
            self._samples.append(sample)

        logger.debug(f"Memory sample {sample_id}: allocated={allocated} resident={resident} correction={correction}")
        return sample

    def samples(self) -> List[MemorySample]:
        """Copy of the log sorted by id."""
        with self._lock.read_locked():
            return sorted(self._samples, key=lambda s: s.id)

    def dump(self, sink: TextIO):
        """
        Write the log as tab-separated text.

        Args:
            sink: Writable text stream; write errors propagate to the caller
        """
        sink.write(DUMP_HEADER + "\n")
        for sample in self.samples():
            sink.write(f"{sample.id}\t{sample.allocated}\t{sample.resident}\t{sample.correction}\n")

    def dump_to_path(self, path: str):
        """Dump the log to a file, replacing it."""
        with open(path, 'w', encoding='utf-8') as f:
            self.dump(f)
        logger.info(f"Wrote {len(self)} memory samples to {path}")

    def log_profile_summary(self):
        """Log peak and final memory figures."""
        samples = self.samples()
        if not samples:
            logger.info("No memory samples recorded")
            return

        peak_allocated = max(s.allocated - s.correction for s in samples)
        peak_resident = max(s.resident for s in samples)
        final = samples[-1]

        logger.info("=== MEMORY PROFILE SUMMARY ===")
        logger.info(f"Samples: {len(samples)}")
        logger.info(f"Peak allocated (net of profiler): {peak_allocated / 1024:.1f} KiB")
        logger.info(f"Peak resident: {peak_resident / 1024 / 1024:.1f} MiB")
        logger.info(f"Final allocated: {final.allocated / 1024:.1f} KiB, resident: {final.resident / 1024 / 1024:.1f} MiB")
