from typing import Dict, Any, Callable, List, Protocol, Union
from .definitions import InputOperationConfig
from .exceptions import UnknownActionError

# ============================================================================
# 1. 协议定义 (Protocols)
# ============================================================================

class InputOperation(Protocol):
    """
    [核心契约] 输入操作：根据整个应用模型与操作配置计算组件的值。
    """
    def __call__(self, model: Dict[str, Any], op_config: Union[InputOperationConfig, Dict[str, Any]]) -> Any:
        ...

# ============================================================================
# 2. 注册中心 (Registry)
# ============================================================================

class InputOperationRegistry:
    """
    输入操作注册中心。
    以 inputOperationConfig.action 的名字查找操作，取代按名字动态取属性的写法。
    """
    def __init__(self):
        self._operations: Dict[str, InputOperation] = {}

    def register(self, action: str) -> Callable[[InputOperation], InputOperation]:
        if not action:
            raise ValueError("Input operation must be registered with a non-empty action name.")

        def decorator(func):
            self._operations[action] = func
            return func
        return decorator

    def get(self, action: str) -> InputOperation:
        operation = self._operations.get(action)
        if not operation:
            raise UnknownActionError(f"No input operation registered for action '{action}'.")
        return operation

    def has(self, action: str) -> bool:
        return action in self._operations

    def get_all_actions(self) -> List[str]:
        return list(self._operations)

# ============================================================================
# 3. 全局实例与辅助函数 (Global Instance & Helpers)
# ============================================================================

default_operation_registry = InputOperationRegistry()
register_operation = default_operation_registry.register
