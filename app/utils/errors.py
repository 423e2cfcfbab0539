from typing import Optional


class TimetableInputError(ValueError):
    """
    Input problems that abort a whole generation.
    `message` is safe to show to the user as-is.
    """

    message = "课表生成失败"

    def __init__(self, message: Optional[str] = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class EmptyInputError(TimetableInputError):
    message = "JSON内容不能为空！"


class MalformedJSONError(TimetableInputError):
    # 不把 json parser 的原始訊息給使用者看
    message = "JSON格式错误，请检查是否复制完整..."


class MalformedInputError(TimetableInputError):
    message = "JSON结构不符合预期，缺少顶层 'data' 数组"
