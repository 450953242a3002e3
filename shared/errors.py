# Dot Shared Errors
# Errors raised by the feedback store and stats engine.
# Each one maps to an HTTP status and a JSON error body.


class FeedbackError(Exception):
    status_code = 500

    def __init__(self, message):
        super().__init__(message)
        self.message = message

    def to_dict(self):
        return {'error': self.message}


class ValidationError(FeedbackError):
    """Submission is missing a required field or has a bad value"""
    status_code = 400

    def __init__(self, message, field=None):
        super().__init__(message)
        self.field = field


class DuplicateSubmissionError(FeedbackError):
    """Client has already rated this project"""
    status_code = 409

    def __init__(self, client_name, project):
        super().__init__(
            f"Client '{client_name}' has already rated project '{project}'. "
            "Please choose another project."
        )
        self.client_name = client_name
        self.project = project


class InvalidMonthError(FeedbackError):
    """Month query parameter is missing or not YYYY-MM"""
    status_code = 400


class StoreUnavailableError(FeedbackError):
    """Underlying storage failed"""
    status_code = 500

    def __init__(self, details):
        super().__init__('Server error.')
        self.details = details

    def to_dict(self):
        return {'error': self.message, 'details': self.details}
