"""Development settings for RoomNest.

Local runs need neither Redis nor a separate Celery worker: tasks execute
inline and the API accepts requests from any origin.
"""

from .base import *  # noqa: F401,F403

DEBUG = True

ALLOWED_HOSTS = ['*']

CORS_ALLOW_ALL_ORIGINS = True

# Run tasks such as booking expiry synchronously when triggered by hand
CELERY_TASK_ALWAYS_EAGER = os.environ.get('CELERY_TASK_ALWAYS_EAGER', 'true').lower() == 'true'  # noqa: F405

LOG_LEVEL = os.environ.get('LOG_LEVEL', 'DEBUG')  # noqa: F405
LOGGING['loggers']['apps']['level'] = LOG_LEVEL  # noqa: F405
LOGGING['loggers']['shared']['level'] = LOG_LEVEL  # noqa: F405
LOGGING['handlers']['console']['level'] = LOG_LEVEL  # noqa: F405
