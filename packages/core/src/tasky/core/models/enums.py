"""枚举定义

包含事件种类 EventKind、派发结果 DispatchStatus 与拒绝原因 RejectionReason。
"""

from enum import StrEnum


class EventKind(StrEnum):
    """事件种类 -- 事件联合类型的判别字段"""

    ADD_TASK_REQUESTED = "ADD_TASK_REQUESTED"
    PLAYBACK_REQUESTED = "PLAYBACK_REQUESTED"
    DELETE_REQUESTED = "DELETE_REQUESTED"
    INPUT_CHANGED = "INPUT_CHANGED"
    FAVORITE_TOGGLED = "FAVORITE_TOGGLED"


class DispatchStatus(StrEnum):
    """单次派发的结果"""

    APPLIED = "applied"
    REJECTED = "rejected"


class RejectionReason(StrEnum):
    """派发被拒绝的原因（状态保持不变）"""

    EMPTY_TITLE = "empty_title"
    INDEX_OUT_OF_RANGE = "index_out_of_range"
    UNKNOWN_TASK = "unknown_task"
