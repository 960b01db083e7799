from pydantic import BaseModel


class ActionUrlResponse(BaseModel):
    """Схема для ответа со ссылкой запуска WOPI-клиента"""
    action: str
    url: str
