from typing import Optional
from pydantic import BaseModel, Field

class register(BaseModel):
    email: str = Field(..., title="Email Address")
    username: str = Field(..., title="Username")
    password: str = Field(..., title="Password")

class login(BaseModel):
    email: str = Field(..., title="Email Address")
    password: str = Field(..., title="Password")

class assign_role(BaseModel):
    role_id: str = Field(..., title="Role ID")

class reset_password(BaseModel):
    new_password: Optional[str] = Field(None, title="New Password")

class update_profile(BaseModel):
    username: Optional[str] = Field(None, title="Username")
    email: Optional[str] = Field(None, title="Email Address")

class change_password(BaseModel):
    old_password: str = Field(..., title="Current Password")
    new_password: str = Field(..., title="New Password")
