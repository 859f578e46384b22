"""Request schemas for the portal API."""

from typing import Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field

from ..models.event import FieldType, FormField

class FormFieldIn(BaseModel):
    """One registration form input as configured by the admin."""
    name: str = Field(..., min_length=1, description="Data key for the submitted value")
    label: str = Field(..., description="Text shown next to the input")
    type: FieldType = Field(FieldType.TEXT, description="Input kind")
    required: bool = False
    options: Optional[List[str]] = Field(None, description="Choices for select fields")

    def to_model(self) -> FormField:
        return FormField(
            name=self.name,
            label=self.label,
            type=self.type,
            required=self.required,
            options=list(self.options) if self.options is not None else None,
        )

class EventIn(BaseModel):
    """Create request; omitted form fields fall back to name/phone/email."""
    model_config = ConfigDict(populate_by_name=True)

    title: str = ''
    date: str = Field('', description="YYYY-MM-DD")
    time: str = ''
    location: str = ''
    image_url: Optional[str] = Field(None, alias='imageUrl')
    description: str = ''
    deadline: str = Field('', description="YYYY-MM-DD")
    max_participants: int = Field(50, ge=0, alias='maxParticipants')
    form_fields: Optional[List[FormFieldIn]] = Field(None, alias='formFields')

class EventUpdate(BaseModel):
    """Partial edit; only the fields sent are merged."""
    model_config = ConfigDict(populate_by_name=True)

    title: Optional[str] = None
    date: Optional[str] = None
    time: Optional[str] = None
    location: Optional[str] = None
    image_url: Optional[str] = Field(None, alias='imageUrl')
    description: Optional[str] = None
    deadline: Optional[str] = None
    max_participants: Optional[int] = Field(None, ge=0, alias='maxParticipants')
    form_fields: Optional[List[FormFieldIn]] = Field(None, alias='formFields')
    is_open: Optional[bool] = Field(None, alias='isOpen')

class RegistrationIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    form_data: Dict[str, str] = Field(default_factory=dict, alias='formData')

class LoginIn(BaseModel):
    password: str = ''

class ImportIn(BaseModel):
    text: str = ''
