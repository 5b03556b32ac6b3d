"""Authentication forms"""

from django import forms


class LoginForm(forms.Form):
    """Email and password sign-in"""

    email = forms.EmailField(
        widget=forms.EmailInput(attrs={"class": "h-12", "placeholder": "Email"}),
        error_messages={"required": "Email is required", "invalid": "Enter a valid email address"},
    )
    password = forms.CharField(
        widget=forms.PasswordInput(attrs={"class": "h-12"}),
        error_messages={"required": "Password is required"},
    )
