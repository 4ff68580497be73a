"""Forms for signup and login."""

from typing import Any, ClassVar, override

from django import forms
from django.contrib.auth.forms import AuthenticationForm
from django.contrib.auth.password_validation import validate_password

from server.apps.accounts.models import (
    USERNAME_MAX_LENGTH,
    USERNAME_MIN_LENGTH,
    username_validator,
)


class SignupForm(forms.Form):
    """Validate signup input before any account is created."""

    username = forms.CharField(
        min_length=USERNAME_MIN_LENGTH,
        max_length=USERNAME_MAX_LENGTH,
        validators=[username_validator],
        error_messages={
            'min_length': 'Username must be between 3 and 20 characters',
            'max_length': 'Username must be between 3 and 20 characters',
        },
    )
    email = forms.EmailField(
        error_messages={'invalid': 'Please provide a valid email'},
    )
    password = forms.CharField(widget=forms.PasswordInput)
    confirm_password = forms.CharField(widget=forms.PasswordInput)

    def clean_email(self) -> str:
        """Normalize email to lowercase."""
        return self.cleaned_data['email'].lower()

    def clean_password(self) -> str:
        """Run the configured password validators."""
        password = self.cleaned_data['password']
        validate_password(password)
        return password

    @override
    def clean(self) -> dict[str, Any]:
        cleaned_data = super().clean()
        password = cleaned_data.get('password')
        if password and password != cleaned_data.get('confirm_password'):
            self.add_error('confirm_password', 'Passwords do not match')
        return cleaned_data


class EmailLoginForm(AuthenticationForm):
    """Login form that labels the username field as email."""

    error_messages: ClassVar[dict[str, str]] = {
        'invalid_login': 'Incorrect email or password',
        'inactive': 'This account is inactive.',
    }

    @override
    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.fields['username'] = forms.EmailField(label='Email')
