# Dot Shared Stats
# Monthly satisfaction stats and action plan

import logging

from .config import DIMENSIONS, ACTION_THRESHOLD
from .helpers import YearMonth

logger = logging.getLogger(__name__)

RECOMMENDATIONS = {
    'reactivity': 'Reactivity: set an SLA (e.g. reply within 24h), weekly check-in, single point of contact.',
    'deadlines': 'Deadlines: milestones, buffer time, regular follow-up, risk management.',
    'deliverables': 'Deliverables: quality checklist, internal review, templates.',
    'professionalism': 'Professionalism: monthly retrospective, training, sharing best practices.',
}


def build_action_plan(projects, threshold=ACTION_THRESHOLD):
    """Recommendations for every project with a dimension below threshold.

    Projects with no failing dimension are left out. Order follows
    the order of the projects passed in.
    """
    actions = []
    for row in projects:
        recommendations = [
            RECOMMENDATIONS[dimension]
            for dimension in DIMENSIONS
            if row[f'avg_{dimension}'] < threshold
        ]
        if recommendations:
            actions.append({
                'project': row['project'],
                'recommendations': recommendations
            })
    return actions


def compute_monthly_stats(store, month):
    """Compute per-project stats and the action plan for one month.

    Args:
        store: FeedbackStore to read from
        month: YearMonth, or 'YYYY-MM' text

    Returns:
        Report dict with month, start, end, projects and action_plan

    Raises InvalidMonthError if month is missing or malformed.
    """
    if not isinstance(month, YearMonth):
        month = YearMonth.parse(month)

    start, end = month.interval()
    projects = store.project_averages(start, end)
    action_plan = build_action_plan(projects)

    logger.info(
        f"Stats for {month}: {len(projects)} projects, {len(action_plan)} need action"
    )

    return {
        'month': str(month),
        'start': start,
        'end': end,
        'projects': projects,
        'action_plan': action_plan
    }
