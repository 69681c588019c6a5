import matplotlib
matplotlib.use('Agg')

from generate_graphs import collect_results, plot_results, run_configuration


def test_run_configuration_reports_ratios():
    result = run_configuration(4, 2, num_pages=8, process_count=2, total_steps=10)
    assert 0.0 <= result['page_fault_ratio'] <= result['tlb_miss_ratio'] <= 1.0
    assert result['disk_accesses'] >= 1


def test_more_frames_never_fault_after_warmup():
    # Every page fits: only the first touch of each page faults
    result = run_configuration(8, 2, num_pages=8, process_count=2, total_steps=50)
    assert result['disk_accesses'] <= 8


def test_plot_results_writes_image(tmp_path):
    results = collect_results(frame_counts=[2, 4], tlb_sizes=[1, 2],
                              num_pages=8, process_count=2, total_steps=10)
    assert sorted(results) == [2, 4]
    assert sorted(results[2]) == [1, 2]

    path = plot_results(results, output_path=str(tmp_path / 'comparison.png'))
    assert (tmp_path / 'comparison.png').stat().st_size > 0
    assert path.endswith('comparison.png')
