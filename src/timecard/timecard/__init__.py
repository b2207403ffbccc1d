"""timecard package.

Employee attendance tracking: clock in/out, breaks, daily and monthly
summaries. Organized by feature modules (users, attendance, reports) with a
thin Flask controller layer over service/repository layers.
"""

__version__ = "1.0.0"
