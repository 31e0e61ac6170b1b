"""ORM Models — SQLAlchemy declarative models for the distribution store and counters.

Invariants:
    - All models inherit from Base (db/base.py)
    - Composite primary keys are the uniqueness targets for ON CONFLICT writes

Design Decisions:
    - One file per concern for locality
    - All models imported here so Base.metadata is complete before create_all
"""

from dailypath.models.daily_keys import DailyKeys  # noqa: F401
from dailypath.models.game_baseline import GameBaseline  # noqa: F401
from dailypath.models.result_count import ResultCount, ResultDedup  # noqa: F401
