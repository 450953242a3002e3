# Dot Shared Module
# Common functions used across the Dot Feedback service

from .config import (
    FEEDBACK_DB_PATH,
    PORT,
    LOG_LEVEL,
    DIMENSIONS,
    ACTION_THRESHOLD
)

from .errors import (
    FeedbackError,
    ValidationError,
    DuplicateSubmissionError,
    InvalidMonthError,
    StoreUnavailableError
)

from .helpers import (
    YearMonth,
    utc_now,
    format_timestamp
)

from .store import (
    FeedbackStore,
    parse_submission,
    parse_rating
)

from .stats import (
    compute_monthly_stats,
    build_action_plan
)

from .client import (
    submit_feedback,
    get_monthly_stats
)
