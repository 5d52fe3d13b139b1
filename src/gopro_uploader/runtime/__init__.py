from .clock import RealSleeper, RecordingSleeper, Sleeper
from .quota import QuotaRetryPolicy, is_quota_error

__all__ = ["QuotaRetryPolicy", "RealSleeper", "RecordingSleeper", "Sleeper", "is_quota_error"]
