import datetime

from production import aggregation
from tests.factories import RESOLVED, build_job, build_phase

TODAY = datetime.date(2024, 5, 6)


def pairs_for(*phases):
    return aggregation.pair_phases(phases)


def test_query_matches_job_number_substring():
    pairs = pairs_for(
        build_phase(build_job('1001-A')),
        build_phase(build_job('2002')),
    )

    matched = aggregation.filter_phases(pairs, query='1001')

    assert [pair.job.job_number for pair in matched] == ['1001-A']


def test_query_is_case_insensitive_across_fields():
    job = build_job('3003', project_name='Riverside Pergola', buyer='Lakeview HOA', salesman='Sam Ortiz')
    pair = pairs_for(build_phase(job, phase_name='Pool Shade'))[0]

    for query in ('riverside', 'LAKEVIEW', 'ortiz', 'pool sh', '300'):
        assert aggregation.matches_query(pair, query)
    assert not aggregation.matches_query(pair, 'downtown')


def test_blank_query_matches_everything():
    pairs = pairs_for(build_phase(), build_phase(phase_number=2))
    assert aggregation.filter_phases(pairs, query='  ') == pairs


def test_status_filter_is_anded_with_query():
    pairs = pairs_for(
        build_phase(build_job('1001'), statuses={'welding_materials': 'ordered'}),
        build_phase(build_job('1002')),
        build_phase(build_job('2001')),
    )

    matched = aggregation.filter_phases(pairs, query='100', area='welding_materials', status='not-ordered')

    assert [pair.job.job_number for pair in matched] == ['1002']


def test_filtering_twice_changes_nothing():
    pairs = pairs_for(
        build_phase(build_job('1001')),
        build_phase(build_job('1001-B'), statuses={'sewing_materials': 'received'}),
        build_phase(build_job('2002')),
    )
    options = {'query': '1001', 'area': 'sewing_materials', 'status': 'not-ordered'}

    once = aggregation.filter_phases(pairs, **options)

    assert aggregation.filter_phases(once, **options) == once


def test_state_filter():
    done = build_phase(is_complete=True)
    started = build_phase(statuses={'welding_materials': 'received'})
    waiting = build_phase()

    matched = aggregation.filter_phases(pairs_for(done, started, waiting), state='in-progress')

    assert [pair.phase for pair in matched] == [started]


def test_partitions_overlap_and_total_hours():
    both = build_phase(
        statuses=RESOLVED,
        welding_labor={'status': 'complete', 'hours': 6},
        sewing_labor={'status': 'complete', 'hours': 2.5},
        installation={'crew_hours_needed': 12},
    )
    welding_only = build_phase(welding_labor={'status': 'estimated', 'hours': 4})
    idle = build_phase()

    partitions = aggregation.partition_production(pairs_for(both, welding_only, idle))

    assert [pair.phase for pair in partitions.welding] == [both, welding_only]
    assert [pair.phase for pair in partitions.sewing] == [both]
    assert [pair.phase for pair in partitions.ready_for_install] == [both]
    assert partitions.welding_hours == 10
    assert partitions.sewing_hours == 2.5
    assert partitions.install_hours == 12


def test_missing_hours_count_as_zero():
    phase = build_phase(welding_labor={'status': 'estimated'})
    assert aggregation.partition_production(pairs_for(phase)).welding_hours == 0


def test_group_by_job_keeps_first_seen_order():
    first, second = build_job('2002'), build_job('1001')
    pairs = pairs_for(
        build_phase(first, phase_number=1),
        build_phase(second, phase_number=1),
        build_phase(first, phase_number=2),
    )

    groups = aggregation.group_by_job(pairs)

    assert [job.job_number for job, _ in groups] == ['2002', '1001']
    assert [phase.phase_number for phase in groups[0][1]] == [1, 2]


def test_upcoming_deadlines_window_and_order():
    later = build_phase(phase_name='later', installation={'install_start_date': '2024-05-12'})
    soon = build_phase(phase_name='soon', welding_labor={'status': 'estimated', 'due_date': '2024-05-07'})
    too_far = build_phase(phase_name='too far', installation={'install_start_date': '2024-05-14'})
    past = build_phase(phase_name='past', installation={'install_start_date': '2024-05-01'})
    undated = build_phase(phase_name='undated')

    deadlines = aggregation.upcoming_deadlines(pairs_for(later, soon, too_far, past, undated), TODAY)

    assert [deadline.phase.phase_name for deadline in deadlines] == ['soon', 'later']
    assert deadlines[0].kind == 'welding'
    assert deadlines[1].date == datetime.date(2024, 5, 12)


def test_upcoming_deadlines_use_earliest_date_and_limit():
    phases = [
        build_phase(phase_name=f"p{i}", installation={'install_start_date': '2024-05-10'})
        for i in range(4)
    ]
    phases.append(build_phase(
        phase_name='both',
        installation={'install_start_date': '2024-05-13'},
        welding_labor={'status': 'estimated', 'due_date': '2024-05-06'},
    ))

    deadlines = aggregation.upcoming_deadlines(pairs_for(*phases), TODAY)

    # ties keep input order
    assert [deadline.phase.phase_name for deadline in deadlines] == ['both', 'p0', 'p1']


def test_malformed_dates_are_skipped():
    phase = build_phase(installation={'install_start_date': 'next tuesday'})
    assert aggregation.upcoming_deadlines(pairs_for(phase), TODAY) == []


def test_job_completion_and_active_jobs():
    job_a, job_b = build_job('1001'), build_job('1002')
    a_phases = [build_phase(job_a, is_complete=True), build_phase(job_a, phase_number=2)]
    b_phases = [build_phase(job_b, is_complete=True)]

    active = aggregation.active_jobs([(job_a, a_phases), (job_b, b_phases), (build_job('1003'), [])])

    assert [job.job_number for job, _ in active] == ['1001']
    assert aggregation.job_completion_percent(a_phases) == 50
    assert aggregation.job_completion_percent([]) == 0


def test_dashboard_counts():
    pairs = pairs_for(
        build_phase(is_complete=True),
        build_phase(),
        build_phase(installation={'install_start_date': '2024-05-08'}),
    )

    assert aggregation.dashboard_counts(pairs) == {
        'active': 2,
        'pending_installation': 1,
        'completed': 1,
    }
