from page_table import PageTable
from memory_manager import PhysicalMemory, Statistics, ProcessStatus
from tlb import TLB
import argparse
import random
import threading
import time

PAGE_SIZE = 256
FRAME_SIZE = PAGE_SIZE
INVALID_FRAME = -1

TOTAL_STEPS = 20
STEP_DELAY = 0.2
MAX_PROCESSES = 10
SEED_BASE = 100

# Display attribute per status, used only by front ends
STATUS_COLORS = {
    ProcessStatus.READY: 'black',
    ProcessStatus.SLEEPING: 'gray',
    ProcessStatus.RUNNING: 'green',
    ProcessStatus.PAUSED: 'orange',
    ProcessStatus.FINISHED: 'red',
}


def logical_address(page_num, offset):
    return page_num * PAGE_SIZE + offset


def physical_address(frame_num, offset):
    return frame_num * FRAME_SIZE + offset


class VirtualMemorySimulator:

    def __init__(self, num_pages, num_frames, tlb_size, invalidate_tlb_on_evict=False):
        for name, value in (('pages', num_pages), ('frames', num_frames), ('TLB entries', tlb_size)):
            if value <= 0:
                raise ValueError(f"Number of {name} must be positive, got {value}")
        self.num_pages = num_pages
        self.num_frames = num_frames
        self.tlb_size = tlb_size
        self.invalidate_tlb_on_evict = invalidate_tlb_on_evict
        self.stats = Statistics()
        self._lock = threading.Lock()
        self.reset()

    def reset(self):
        # Waits for any in-flight translation before rebuilding
        with self._lock:
            self.page_table = PageTable(self.num_pages)
            self.physical_memory = PhysicalMemory(self.num_frames)
            self.tlb = TLB(self.tlb_size)
            self.stats.clear()

    def translate(self, page_num, process_id):
        if page_num < 0 or page_num >= self.num_pages:
            return INVALID_FRAME

        with self._lock:
            return self._translate(page_num, process_id)

    def translate_and_render(self, page_num, process_id):
        # Frame and state dump from the same critical section
        if page_num < 0 or page_num >= self.num_pages:
            return INVALID_FRAME, self.render_state()

        with self._lock:
            frame_num = self._translate(page_num, process_id)
            snapshot = self._snapshot()
        return frame_num, self._format_state(snapshot)

    def _translate(self, page_num, process_id):
        self.stats.record_reference(process_id)

        # First check TLB
        frame_num = self.tlb.lookup(page_num)
        if frame_num is not None:
            return frame_num

        self.stats.record_tlb_miss(process_id)

        frame_num = self.page_table.lookup(page_num)
        if frame_num is not None:
            self.tlb.insert(page_num, frame_num)
            return frame_num

        return self.handle_page_fault(page_num, process_id)

    def handle_page_fault(self, page_num, process_id):
        self.stats.record_page_fault(process_id)

        frame_num = self.physical_memory.next_victim()
        old_page = self.physical_memory.get_resident_page(frame_num)
        if old_page is not None:
            self.page_table.unmap(old_page)
            if self.invalidate_tlb_on_evict:
                self.tlb.invalidate_page(old_page)

        self.page_table.map(page_num, frame_num)
        self.physical_memory.load(frame_num, page_num)
        self.tlb.insert(page_num, frame_num)
        return frame_num

    def _snapshot(self):
        return ([entry.page_num for entry in self.tlb],
                [entry.frame_num for entry in self.tlb],
                self.page_table.frame_numbers(),
                self.page_table.valid_bits())

    def _format_state(self, snapshot):
        tlb_pages, tlb_frames, frames, valid = snapshot

        def row(label, values):
            return f"{label:<8}" + ''.join(f"{value:<4d}" for value in values)

        lines = [
            '-' * 98,
            "The current state of the TLB:",
            row('Page#:', tlb_pages),
            row('Frame#:', tlb_frames),
            '',
            "The page table (page#: frame# (-1 if not mapped), valid bit):",
            row('Page#:', range(self.num_pages)),
            row('Frame#:', frames),
            row('Valid:', valid),
        ]
        return '\n'.join(lines) + '\n'

    def render_state(self):
        with self._lock:
            snapshot = self._snapshot()
        return self._format_state(snapshot)

    @property
    def total_page_references(self):
        return self.stats.total_page_references

    @property
    def tlb_misses(self):
        return self.stats.tlb_misses

    @property
    def page_faults(self):
        return self.stats.page_faults

    @property
    def disk_accesses(self):
        return self.stats.disk_accesses

    @property
    def tlb_miss_ratio(self):
        return self.stats.tlb_miss_ratio

    @property
    def page_fault_ratio(self):
        return self.stats.page_fault_ratio

    def get_or_create_process_stats(self, process_id):
        return self.stats.get_or_create(process_id)

    def get_process_stats(self, process_id):
        return self.stats.processes.get(process_id)

    def process_stats(self):
        return {pid: self.stats.processes[pid] for pid in self.stats.process_ids()}

    def get_status(self, process_id):
        return self.get_or_create_process_stats(process_id).status

    def set_status(self, process_id, status):
        self.get_or_create_process_stats(process_id).status = ProcessStatus(status)


def format_step(process_id, step, page_num, offset, frame_num, state):
    return (f"\n------ Process {process_id} - Step {step} ------\n"
            f"Page {page_num} requested. "
            f"Logical address: {logical_address(page_num, offset)} => "
            f"Physical address: {physical_address(frame_num, offset)}\n\n"
            f"{state}")


def format_statistics(simulator):
    lines = [
        f"{'Total References:':<32} {simulator.total_page_references}",
        f"{'TLB Miss Ratio:':<32} {simulator.tlb_miss_ratio:.2f}",
        f"{'Page Fault Ratio:':<32} {simulator.page_fault_ratio:.2f}",
        f"{'Disk Accesses:':<32} {simulator.disk_accesses}",
    ]
    for process_id, stats in simulator.process_stats().items():
        lines.append(f"{f'Process {process_id} References:':<32} {stats.page_references}")
        lines.append(f"{f'Process {process_id} TLB Miss Ratio:':<32} {stats.tlb_miss_ratio:.2f}")
        lines.append(f"{f'Process {process_id} Page Fault Ratio:':<32} {stats.page_fault_ratio:.2f}")
        lines.append(f"{f'Process {process_id} Status:':<32} {stats.status.value}")
    return '\n'.join(lines)


class SimulationRunner:
    """
    Drives a set of logical processes against one shared simulator.

    Each process draws its references from its own seeded random stream.
    Processes run either one step at a time (step()) or concurrently, one
    thread per process (start()/wait()). Pausing and stopping are observed
    between steps, never while a translation is in progress.
    """

    def __init__(self, num_pages, num_frames, tlb_size, process_count=1,
                 total_steps=TOTAL_STEPS, step_delay=STEP_DELAY,
                 invalidate_tlb_on_evict=False, on_step=print):
        if process_count <= 0:
            raise ValueError(f"Process count must be positive, got {process_count}")
        self.num_pages = num_pages
        self.num_frames = num_frames
        self.tlb_size = tlb_size
        self.process_count = process_count
        self.total_steps = total_steps
        self.step_delay = step_delay
        self.invalidate_tlb_on_evict = invalidate_tlb_on_evict
        self.on_step = on_step

        self.simulator = None
        self.current_step = 0
        self.running = False
        self.paused = False
        self._generators = {}
        self._threads = []
        self._live_workers = 0
        self._errors = []
        self._step_lock = threading.Lock()
        self._pause_cond = threading.Condition()

    @property
    def active(self):
        return self._live_workers > 0

    def initialize(self):
        if self.active:
            raise RuntimeError("Cannot reinitialize while a run is in progress")
        self.simulator = VirtualMemorySimulator(self.num_pages, self.num_frames, self.tlb_size,
                                                self.invalidate_tlb_on_evict)
        self.current_step = 0
        self.paused = False
        self._errors = []
        self._generators = {pid: random.Random(SEED_BASE + pid) for pid in range(self.process_count)}
        for pid in range(self.process_count):
            self.simulator.get_or_create_process_stats(pid)
        return self.simulator

    def _require_simulator(self):
        if self.simulator is None:
            raise RuntimeError("Simulation has not been initialized")

    def perform_step(self, process_id):
        rng = self._generators[process_id]
        page_num = rng.randrange(self.simulator.num_pages)
        offset = rng.randrange(PAGE_SIZE)

        if self.on_step is None:
            frame_num = self.simulator.translate(page_num, process_id)
        else:
            frame_num, state = self.simulator.translate_and_render(page_num, process_id)

        with self._step_lock:
            self.current_step += 1
            step = self.current_step
        if self.on_step is not None:
            self.on_step(format_step(process_id, step, page_num, offset, frame_num, state))
        return page_num, frame_num

    def step(self):
        self._require_simulator()
        if self.active:
            raise RuntimeError("Cannot single-step while a run is in progress")
        process_id = self.current_step % self.process_count
        return self.perform_step(process_id)

    def start(self):
        self._require_simulator()
        if self.active:
            raise RuntimeError("A run is already in progress")

        self.current_step = 0
        self.running = True
        self.paused = False
        self._errors = []
        self._live_workers = self.process_count
        for pid in range(self.process_count):
            self.simulator.set_status(pid, ProcessStatus.SLEEPING)

        self._threads = [threading.Thread(target=self._run_process, args=(pid,), daemon=True)
                         for pid in range(self.process_count)]
        for thread in self._threads:
            thread.start()

    def _run_process(self, process_id):
        stats = self.simulator.get_or_create_process_stats(process_id)
        try:
            for _ in range(self.total_steps):
                if not self.running:
                    break
                if self.paused:
                    stats.status = ProcessStatus.PAUSED
                    with self._pause_cond:
                        while self.paused and self.running:
                            self._pause_cond.wait(timeout=0.1)
                    if not self.running:
                        break

                stats.status = ProcessStatus.RUNNING
                self.perform_step(process_id)
                if self.step_delay:
                    time.sleep(self.step_delay)
        except Exception as e:
            self._errors.append(e)
        finally:
            # Counted down before FINISHED so is_finished() implies not active
            with self._step_lock:
                self._live_workers -= 1
                if self._live_workers == 0:
                    self.running = False
            stats.status = ProcessStatus.FINISHED

    def pause(self):
        with self._pause_cond:
            self.paused = True
            self._pause_cond.notify_all()

    def resume(self):
        with self._pause_cond:
            self.paused = False
            self._pause_cond.notify_all()

    def toggle_pause(self):
        if self.paused:
            self.resume()
        else:
            self.pause()
        return self.paused

    def stop(self):
        with self._pause_cond:
            self.running = False
            self._pause_cond.notify_all()

    def wait(self, timeout=None):
        deadline = None if timeout is None else time.monotonic() + timeout
        for thread in self._threads:
            if deadline is None:
                thread.join()
            else:
                thread.join(max(0.0, deadline - time.monotonic()))
        if any(thread.is_alive() for thread in self._threads):
            return False
        self.running = False
        self._threads = []
        if self._errors:
            raise self._errors[0]
        return True

    def is_finished(self):
        if self.simulator is None:
            return False
        return all(stats.status == ProcessStatus.FINISHED
                   for stats in self.simulator.process_stats().values())


def build_parser():
    parser = argparse.ArgumentParser(description="Multi-process TLB and page table simulator")
    parser.add_argument("--pages", type=int, required=True, help="number of virtual pages")
    parser.add_argument("--frames", type=int, required=True, help="number of physical frames")
    parser.add_argument("--tlb-size", type=int, required=True, help="number of TLB entries")
    parser.add_argument("--processes", type=int, default=1, help=f"number of processes (1-{MAX_PROCESSES})")
    parser.add_argument("--steps", type=int, default=TOTAL_STEPS, help="references per process")
    parser.add_argument("--delay", type=float, default=STEP_DELAY, help="seconds between steps")
    parser.add_argument("--step-only", type=int, metavar="N", help="perform N single steps instead of a threaded run")
    parser.add_argument("--invalidate-tlb", action="store_true", help="purge TLB entries of evicted pages")
    parser.add_argument("--quiet", action="store_true", help="do not print the state after every step")
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if not 1 <= args.processes <= MAX_PROCESSES:
        parser.error(f"--processes must be between 1 and {MAX_PROCESSES}")
    if args.steps < 0 or args.delay < 0:
        parser.error("--steps and --delay must not be negative")

    try:
        runner = SimulationRunner(args.pages, args.frames, args.tlb_size,
                                  process_count=args.processes,
                                  total_steps=args.steps,
                                  step_delay=args.delay,
                                  invalidate_tlb_on_evict=args.invalidate_tlb,
                                  on_step=None if args.quiet else print)
        simulator = runner.initialize()
    except ValueError as e:
        parser.error(str(e))

    print("Simulation initialized")
    if args.step_only is not None:
        for _ in range(args.step_only):
            runner.step()
    else:
        runner.start()
        try:
            runner.wait()
        except KeyboardInterrupt:
            runner.stop()
            runner.wait()
        print("\nSimulation completed successfully!")

    print(f"\n{'='*60}")
    print(format_statistics(simulator))
    print(f"{'='*60}")
    return simulator


if __name__ == '__main__':
    main()
