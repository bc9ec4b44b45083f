from pydantic import AliasChoices, BaseModel, ConfigDict, EmailStr, Field
from typing import Optional

# Shared properties for user models
class UserBase(BaseModel):
    email: EmailStr

# Schema for user authentication credentials
class UserLogin(UserBase):
    password: str

# Schema for user registration requests
class UserCreate(UserBase):
    password: str = Field(min_length=6)
    username: Optional[str] = None
    fullname: Optional[str] = None
    role: str = "staff"

# Schema for profile edits, all fields optional
class UserUpdate(BaseModel):
    email: Optional[EmailStr] = None
    username: Optional[str] = None
    fullname: Optional[str] = None

# Schema for password changes; the profile page posts camelCase keys
class PasswordChange(BaseModel):
    current_password: str = Field(validation_alias=AliasChoices("current_password", "currentPassword"))
    new_password: str = Field(min_length=6, validation_alias=AliasChoices("new_password", "newPassword"))

# Output schema for user profile details
class UserResponse(BaseModel):
    id: int
    email: str
    username: Optional[str] = None
    fullname: Optional[str] = None
    role: str

    model_config = ConfigDict(from_attributes=True)

class UserEnvelope(BaseModel):
    user: UserResponse

# Schema for JWT authentication token response
class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserResponse
