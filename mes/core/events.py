"""进程内事件总线

数据存储在每次变更后同步通知所有订阅者。主题格式为 "<集合>.<动作>"，
例如 "work_orders.created"；订阅模式支持：

  - 精确匹配:   "work_orders.created"
  - 前缀匹配:   "work_orders."
  - 通配符:     "work_orders.*"（按前缀处理）
  - 全部:       "*"
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Tuple

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StoreEvent:
    topic: str
    payload: Dict[str, Any] = field(default_factory=dict)

    @property
    def collection(self) -> str:
        return self.topic.split(".", 1)[0]

    @property
    def action(self) -> str:
        return self.topic.split(".", 1)[-1]


Listener = Callable[[StoreEvent], None]


def pattern_matches(pattern: str, topic: str) -> bool:
    if not pattern:
        return False
    if pattern == "*" or pattern == topic:
        return True
    if pattern.endswith(".*"):
        return topic.startswith(pattern[:-1])  # 保留末尾的 '.'
    if pattern.endswith("."):
        return topic.startswith(pattern)
    return False


class EventBus:
    """同步发布/订阅"""

    def __init__(self):
        self._listeners: List[Tuple[str, Listener]] = []

    def subscribe(self, pattern: str, listener: Listener) -> Callable[[], None]:
        """注册监听器，返回取消订阅函数"""
        entry = (pattern, listener)
        self._listeners.append(entry)

        def unsubscribe():
            if entry in self._listeners:
                self._listeners.remove(entry)

        return unsubscribe

    def publish(self, topic: str, **payload) -> StoreEvent:
        event = StoreEvent(topic=topic, payload=payload)
        logger.debug("publish %s %s", topic, payload)
        # 拷贝一份，监听器在回调中增删订阅不影响本轮分发
        for pattern, listener in list(self._listeners):
            if pattern_matches(pattern, topic):
                listener(event)
        return event
