from simulator import VirtualMemorySimulator, INVALID_FRAME


def run_references(simulator, pages, process_id=0):
    return [simulator.translate(page, process_id) for page in pages]


def test_small():
    # 4 pages, 2 frames, 2 TLB entries; page 2 evicts page 0, then page 0 evicts page 1
    simulator = VirtualMemorySimulator(num_pages=4, num_frames=2, tlb_size=2)
    frames = run_references(simulator, [0, 1, 2, 0])

    assert frames == [0, 1, 0, 1]
    assert simulator.total_page_references == 4
    assert simulator.page_faults == 4
    assert simulator.disk_accesses == 4
    assert simulator.tlb_misses == 4
    assert simulator.page_table.lookup(2) == 0
    assert simulator.page_table.lookup(0) == 1
    assert simulator.page_table.lookup(1) is None
    assert simulator.physical_memory.frames == [2, 0]

    stats = simulator.get_process_stats(0)
    assert stats.page_references == 4
    assert stats.page_faults == 4
    assert stats.page_fault_ratio == 1.0


def test_out_of_range_page():
    simulator = VirtualMemorySimulator(num_pages=4, num_frames=2, tlb_size=2)
    simulator.translate(1, 0)

    assert simulator.translate(4, 0) == INVALID_FRAME
    assert simulator.translate(-1, 7) == INVALID_FRAME

    assert simulator.total_page_references == 1
    assert simulator.tlb_misses == 1
    assert simulator.page_faults == 1
    assert simulator.get_process_stats(0).page_references == 1
    # Rejected references never create a process record
    assert simulator.get_process_stats(7) is None
