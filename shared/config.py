# Dot Shared Config
# Central configuration for the Dot Feedback service

import os

# Storage
FEEDBACK_DB_PATH = os.environ.get('FEEDBACK_DB_PATH', 'satisfaction.db')

# Server
PORT = int(os.environ.get('PORT', 3000))
LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')

# API client
FEEDBACK_API_URL = os.environ.get('FEEDBACK_API_URL', 'http://localhost:3000')

# Ratings
DIMENSIONS = ['reactivity', 'deadlines', 'deliverables', 'professionalism']
RATING_MIN = 1
RATING_MAX = 5

# Action plan
ACTION_THRESHOLD = 4.0
