# Dot Feedback
# Client satisfaction feedback for Hunch agency
#
# - Collects one rating per client per project (four dimensions + suggestions)
# - Reports monthly averages per project, worst first
# - Builds an action plan for projects scoring below threshold

import sys
import os
import logging

# Add parent directory to path for shared imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from flask import Flask, request, jsonify
from flask_cors import CORS

from shared import (
    FEEDBACK_DB_PATH,
    PORT,
    LOG_LEVEL,
    FeedbackError,
    FeedbackStore,
    compute_monthly_stats
)

logger = logging.getLogger(__name__)


def create_app(store):
    """Build the Flask app around an open FeedbackStore"""
    app = Flask(__name__)
    app.extensions['feedback_store'] = store
    CORS(app, resources={r'/api/*': {'origins': '*'}})

    @app.errorhandler(FeedbackError)
    def handle_feedback_error(error):
        if error.status_code >= 500:
            logger.error(f"{type(error).__name__}: {error.to_dict()}")
        else:
            logger.warning(f"{type(error).__name__}: {error.message}")
        return jsonify(error.to_dict()), error.status_code

    @app.route('/api/feedback', methods=['POST'])
    def submit():
        """Save one client's feedback for a project.

        Accepts:
            - email, client_name, project: required text
            - reactivity, deadlines, deliverables, professionalism: required 1-5
            - <dimension>_suggestion, global_comment: optional text

        Returns:
            - 200 {ok, message, id}
            - 400 missing/invalid field, 409 already rated, 500 storage error
        """
        data = request.get_json(silent=True)
        record_id = store.submit(data)

        return jsonify({
            'ok': True,
            'message': 'Feedback saved.',
            'id': record_id
        })

    @app.route('/api/stats', methods=['GET'])
    def stats():
        """Monthly stats and action plan.

        Query:
            - month: YYYY-MM

        Returns:
            - month, start, end, projects (worst first), action_plan
        """
        report = compute_monthly_stats(store, request.args.get('month'))
        return jsonify(report)

    @app.route('/health', methods=['GET'])
    def health():
        """Health check endpoint"""
        return jsonify({
            'status': 'healthy',
            'service': 'Dot Feedback',
            'version': '1.0'
        })

    return app


if __name__ == '__main__':
    logging.basicConfig(
        level=LOG_LEVEL,
        format='%(asctime)s | %(levelname)s | %(name)s | %(message)s'
    )

    with FeedbackStore(FEEDBACK_DB_PATH) as feedback_store:
        app = create_app(feedback_store)
        logger.info(f"Dot Feedback listening on http://localhost:{PORT}")
        app.run(host='0.0.0.0', port=PORT)
