import pytest

from tlb import TLB, TLBEntry


def test_new_tlb_is_all_invalid():
    tlb = TLB(3)
    assert len(tlb) == 3
    assert all(not entry.valid for entry in tlb)
    assert tlb.lookup(-1) is None


def test_insert_and_lookup():
    tlb = TLB(2)
    tlb.insert(5, 1)
    assert tlb.lookup(5) == 1
    assert tlb.lookup(6) is None


def test_fifo_replacement_wraps_cursor():
    tlb = TLB(2)
    tlb.insert(1, 10)
    tlb.insert(2, 20)
    # Hit on page 1 does not protect it: FIFO, not LRU
    assert tlb.lookup(1) == 10
    tlb.insert(3, 30)

    assert tlb.lookup(1) is None
    assert tlb.lookup(2) == 20
    assert tlb.lookup(3) == 30
    assert tlb.next_free_index == 1


def test_duplicate_entries_are_not_purged():
    tlb = TLB(3)
    tlb.insert(4, 0)
    tlb.insert(4, 2)
    pages = [entry.page_num for entry in tlb if entry.valid]
    assert pages == [4, 4]
    # First valid slot in scan order wins
    assert tlb.lookup(4) == 0


def test_invalidate_page_clears_every_slot():
    tlb = TLB(3)
    tlb.insert(4, 0)
    tlb.insert(7, 1)
    tlb.insert(4, 2)
    tlb.invalidate_page(4)

    assert tlb.lookup(4) is None
    assert tlb.lookup(7) == 1
    assert tlb.next_free_index == 0


def test_entry_repr():
    assert repr(TLBEntry(1, 2, True)) == "TLBEntry(page=1, frame=2, valid=True)"


@pytest.mark.parametrize("size", [0, -3])
def test_non_positive_size_rejected(size):
    with pytest.raises(ValueError):
        TLB(size)
