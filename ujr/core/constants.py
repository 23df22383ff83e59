"""
Application-wide constants.

Centralize column limits and log formatting here so models,
validation and logging agree on the same values.
"""


# ========================================
# Column Limits
# ========================================

USER_NAME_MAX_LENGTH = 100
USER_SURNAME_MAX_LENGTH = 100
JOB_NAME_MAX_LENGTH = 200

# ========================================
# Constraint Names
# ========================================

USER_NATURAL_KEY_CONSTRAINT = "uq_users_name_surname_age"
JOB_NATURAL_KEY_CONSTRAINT = "uq_jobs_name_salary"

# ========================================
# Logging
# ========================================

ROOT_LOGGER_NAME = "ujr"
LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
