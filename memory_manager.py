import threading
from enum import Enum


class PhysicalMemory:
    def __init__(self, num_frames):
        if num_frames <= 0:
            raise ValueError(f"Number of frames must be positive, got {num_frames}")
        self.num_frames = num_frames
        # Each frame stores the resident page number or None if free
        self.frames = [None] * num_frames
        # FIFO pointer: the frame loaded into next is always the least recently loaded
        self.next_load_location = 0

    def next_victim(self):
        return self.next_load_location

    def get_resident_page(self, frame_num):
        return self.frames[frame_num]

    def load(self, frame_num, page_num):
        self.frames[frame_num] = page_num
        self.next_load_location = (self.next_load_location + 1) % self.num_frames


class ProcessStatus(Enum):
    READY = "READY"
    SLEEPING = "SLEEPING"
    RUNNING = "RUNNING"
    PAUSED = "PAUSED"
    FINISHED = "FINISHED"


def ratio(part, total):
    return part / total if total > 0 else 0.0


class ProcessStats:
    def __init__(self):
        self._lock = threading.Lock()
        self.page_references = 0
        self.tlb_misses = 0
        self.page_faults = 0
        self.status = ProcessStatus.READY

    def record_reference(self):
        with self._lock:
            self.page_references += 1

    def record_tlb_miss(self):
        with self._lock:
            self.tlb_misses += 1

    def record_page_fault(self):
        with self._lock:
            self.page_faults += 1

    @property
    def tlb_miss_ratio(self):
        with self._lock:
            return ratio(self.tlb_misses, self.page_references)

    @property
    def page_fault_ratio(self):
        with self._lock:
            return ratio(self.page_faults, self.page_references)


class Statistics:
    def __init__(self):
        self._lock = threading.Lock()
        self.total_page_references = 0
        self.tlb_misses = 0
        self.page_faults = 0
        self.disk_accesses = 0
        self.processes = {}  # process_id -> ProcessStats

    def get_or_create(self, process_id):
        with self._lock:
            if process_id not in self.processes:
                self.processes[process_id] = ProcessStats()
            return self.processes[process_id]

    def process_ids(self):
        with self._lock:
            return sorted(self.processes)

    def record_reference(self, process_id):
        self.get_or_create(process_id).record_reference()
        with self._lock:
            self.total_page_references += 1

    def record_tlb_miss(self, process_id):
        self.get_or_create(process_id).record_tlb_miss()
        with self._lock:
            self.tlb_misses += 1

    def record_page_fault(self, process_id):
        self.get_or_create(process_id).record_page_fault()
        with self._lock:
            self.page_faults += 1
            # No disk cache: every fault reads the page in
            self.disk_accesses += 1

    @property
    def tlb_miss_ratio(self):
        with self._lock:
            return ratio(self.tlb_misses, self.total_page_references)

    @property
    def page_fault_ratio(self):
        with self._lock:
            return ratio(self.page_faults, self.total_page_references)

    def clear(self):
        with self._lock:
            self.total_page_references = 0
            self.tlb_misses = 0
            self.page_faults = 0
            self.disk_accesses = 0
            self.processes.clear()
