UNMAPPED = -1


class PageTableEntry:
    def __init__(self, page_num):
        self.page_num = page_num
        self.frame_num = None  # None means not in memory

    def is_valid(self):
        return self.frame_num is not None


class PageTable:
    def __init__(self, num_pages):
        if num_pages <= 0:
            raise ValueError(f"Number of pages must be positive, got {num_pages}")
        self.num_pages = num_pages
        self.entries = [PageTableEntry(i) for i in range(num_pages)]

    def get_entry(self, page_num):
        return self.entries[page_num]

    def lookup(self, page_num):
        return self.entries[page_num].frame_num

    def map(self, page_num, frame_num):
        self.entries[page_num].frame_num = frame_num

    def unmap(self, page_num):
        self.entries[page_num].frame_num = None

    def frame_numbers(self):
        # Rendered form: UNMAPPED for pages with no frame
        return [entry.frame_num if entry.is_valid() else UNMAPPED for entry in self.entries]

    def valid_bits(self):
        return [1 if entry.is_valid() else 0 for entry in self.entries]
