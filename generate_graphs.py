import matplotlib.pyplot as plt
from simulator import SimulationRunner

NUM_PAGES = 16
PROCESS_COUNT = 4
TOTAL_STEPS = 50
tlb_sizes = [1, 2, 4, 8]
frame_counts = [2, 4, 8]


def run_configuration(num_frames, tlb_size, num_pages=NUM_PAGES,
                      process_count=PROCESS_COUNT, total_steps=TOTAL_STEPS):
    runner = SimulationRunner(num_pages, num_frames, tlb_size,
                              process_count=process_count,
                              total_steps=total_steps,
                              step_delay=0,
                              on_step=None)
    simulator = runner.initialize()
    runner.start()
    runner.wait()
    return {
        'tlb_miss_ratio': simulator.tlb_miss_ratio,
        'page_fault_ratio': simulator.page_fault_ratio,
        'disk_accesses': simulator.disk_accesses,
    }


def collect_results(frame_counts=frame_counts, tlb_sizes=tlb_sizes, **kwargs):
    results = {}
    for num_frames in frame_counts:
        results[num_frames] = {}
        for tlb_size in tlb_sizes:
            results[num_frames][tlb_size] = run_configuration(num_frames, tlb_size, **kwargs)
    return results


def plot_results(results, output_path='tlb_comparison.png', show=False):
    frames = list(results)
    sizes = list(results[frames[0]])

    fig, axes = plt.subplots(1, 2, figsize=(12, 5))
    fig.suptitle('TLB Size vs. Frame Count', fontsize=14, fontweight='bold')

    metrics = ['tlb_miss_ratio', 'page_fault_ratio']
    titles = ['TLB Miss Ratio', 'Page Fault Ratio']

    width = 0.8 / len(frames)
    legend_handles = []

    for idx, (metric, title) in enumerate(zip(metrics, titles)):
        ax = axes[idx]
        x = range(len(sizes))
        for offset, num_frames in enumerate(frames):
            values = [results[num_frames][size][metric] for size in sizes]
            positions = [i - 0.4 + width * (offset + 0.5) for i in x]
            bars = ax.bar(positions, values, width, label=f'{num_frames} frames')
            if idx == 0:
                legend_handles.append(bars[0])
            for bar in bars:
                height = bar.get_height()
                ax.text(bar.get_x() + bar.get_width()/2., height,
                        f'{height:.2f}', ha='center', va='bottom', fontsize=8)

        ax.set_title(title)
        ax.set_xlabel('TLB entries')
        ax.set_xticks(list(x))
        ax.set_xticklabels([str(size) for size in sizes])
        ax.set_ylim(0, 1.1)
        ax.grid(axis='y', alpha=0.3)

    fig.legend(legend_handles, [f'{f} frames' for f in frames], loc='lower center',
               ncol=len(frames), frameon=True)

    plt.tight_layout()
    plt.subplots_adjust(bottom=0.18)
    plt.savefig(output_path, dpi=300, bbox_inches='tight')
    if show:
        plt.show()
    plt.close(fig)
    return output_path


if __name__ == '__main__':
    print("Running simulations...")
    results = collect_results()
    path = plot_results(results, show=True)
    print(f"\nGraph saved as '{path}'")
