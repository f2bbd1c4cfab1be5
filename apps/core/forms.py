# apps/core/forms.py
from django import forms

from .encryption import encrypt
from .models import UserProfile


class ApiModelForm(forms.ModelForm):
    """
    ModelForm bound from JSON payloads.

    Forms take the acting user first, so owned relations can be narrowed to
    that user's rows. Fields named in `encrypted_fields` are stored encrypted.
    """
    encrypted_fields = ()

    def __init__(self, user, *args, **kwargs):
        self.user = user
        super().__init__(*args, **kwargs)

    def limit_to_user(self, *field_names):
        for name in field_names:
            field = self.fields[name]
            field.queryset = field.queryset.filter(user=self.user)

    def clean(self):
        cleaned = super().clean()
        # Empty JSON values come back as None; keep the column default instead
        for name, field in self.fields.items():
            if isinstance(field, forms.JSONField) and cleaned.get(name) is None:
                model_field = self._meta.model._meta.get_field(name)
                if not model_field.null:
                    cleaned[name] = model_field.get_default()
        return cleaned

    def save(self, commit=True):
        obj = super().save(commit=False)
        owned = any(f.name == 'user' for f in obj._meta.concrete_fields)
        if owned and obj.user_id is None:
            obj.user = self.user
        for name in self.encrypted_fields:
            setattr(obj, name, encrypt(getattr(obj, name), obj.user_id))
        if commit:
            obj.save()
        return obj


class UserProfileForm(ApiModelForm):
    class Meta:
        model = UserProfile
        fields = [
            'display_name', 'timezone', 'language',
            'day_start_hour', 'day_end_hour', 'email_notifications', 'settings',
        ]
