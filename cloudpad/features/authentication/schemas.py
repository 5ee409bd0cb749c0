from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# ---------- Inputs ----------

class CredentialsIn(BaseModel):
    username: str = Field(min_length=1, max_length=64, examples=["alice"])
    password: str = Field(min_length=1, max_length=128, examples=["pw1"])


# ---------- Outputs ----------

class _CamelOut(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

class RegisterOut(_CamelOut):
    success: bool = True

class LoginOut(_CamelOut):
    success: bool = True
    is_admin: bool

class MeOut(_CamelOut):
    username: str
