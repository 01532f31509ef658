# uischema/engine/schema/exceptions.py

class SchemaEngineError(Exception):
    """Schema 引擎所有错误的基类"""
    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)

class MalformedSchemaError(SchemaEngineError):
    """结构损坏：悬空指针、指针合流、环，或无法通过模型校验"""
    pass

class InvalidOperationError(SchemaEngineError):
    """操作在当前结构上没有定义 (例如对顶层节点执行 unnest)"""
    pass

class DuplicateIdentifierError(SchemaEngineError):
    """新组件生成的 ID 与已有组件冲突"""
    pass

class UnknownActionError(SchemaEngineError):
    """inputOperationConfig.action 没有对应的已注册操作"""
    pass
