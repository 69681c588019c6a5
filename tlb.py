class TLBEntry:
    def __init__(self, page_num=-1, frame_num=-1, valid=False):
        self.page_num = page_num
        self.frame_num = frame_num
        self.valid = valid

    def __repr__(self):
        return f"TLBEntry(page={self.page_num}, frame={self.frame_num}, valid={self.valid})"


class TLB:
    def __init__(self, size):
        if size <= 0:
            raise ValueError(f"TLB size must be positive, got {size}")
        self.size = size
        self.entries = [TLBEntry() for _ in range(size)]
        # Slot the next insertion overwrites (FIFO, not LRU)
        self.next_free_index = 0

    def lookup(self, page_num):
        for entry in self.entries:
            if entry.valid and entry.page_num == page_num:
                return entry.frame_num
        return None

    def insert(self, page_num, frame_num):
        # Older entries for the same page are left in place
        entry = self.entries[self.next_free_index]
        entry.page_num = page_num
        entry.frame_num = frame_num
        entry.valid = True
        self.next_free_index = (self.next_free_index + 1) % self.size

    def invalidate_page(self, page_num):
        for entry in self.entries:
            if entry.valid and entry.page_num == page_num:
                entry.valid = False

    def __iter__(self):
        return iter(self.entries)

    def __len__(self):
        return self.size
