from pydantic import BaseModel


class SecretConfig(BaseModel):
    username: str = ''
    api_key: str = ''
