"""
Admin configuration for accounts app
"""
from django import forms
from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.contrib.auth.forms import UserCreationForm, ReadOnlyPasswordHashField
from .models import User


def _validate_payment_model_for_role(cleaned_data):
    role = cleaned_data.get('role')
    model = cleaned_data.get('payment_model')
    if role == User.ROLE_INSTRUCTOR and not model:
        raise forms.ValidationError(
            {'payment_model': 'Instructors need a payment model (fixed salary or profit share).'}
        )
    if role != User.ROLE_INSTRUCTOR and model:
        raise forms.ValidationError(
            {'payment_model': 'Only instructors have a payment model.'}
        )


class UserAdminForm(forms.ModelForm):
    """
    Change form with proper password handling.
    Password is read-only (hash display only); use the "Change password" link.
    """
    password = ReadOnlyPasswordHashField(
        label='Password',
        help_text='Raw passwords are not stored. Use the "Change password" link to set a new one.',
    )

    class Meta:
        model = User
        fields = '__all__'

    def clean(self):
        cleaned = super().clean()
        _validate_payment_model_for_role(cleaned)
        return cleaned


class UserAddForm(UserCreationForm):
    """Add form with instructor payout validation."""

    class Meta(UserCreationForm.Meta):
        model = User
        fields = ('email', 'full_name', 'role', 'phone', 'payment_model', 'profit_share_percentage')

    def clean(self):
        cleaned = super().clean()
        _validate_payment_model_for_role(cleaned)
        return cleaned


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """Custom User Admin"""
    form = UserAdminForm
    add_form = UserAddForm
    list_display = ['email', 'full_name', 'role', 'payment_model', 'is_active', 'date_joined']
    list_filter = ['role', 'payment_model', 'is_active', 'is_staff', 'date_joined']
    search_fields = ['email', 'full_name', 'phone']
    ordering = ['-date_joined']

    fieldsets = (
        (None, {'fields': ('email', 'password')}),
        ('Personal Info', {'fields': ('full_name', 'role', 'phone')}),
        ('Instructor payout', {'fields': ('payment_model', 'profit_share_percentage')}),
        ('Permissions', {'fields': ('is_active', 'is_staff', 'is_superuser', 'groups', 'user_permissions')}),
        ('Important dates', {'fields': ('last_login', 'date_joined', 'updated_at')}),
    )

    add_fieldsets = (
        (None, {
            'classes': ('wide',),
            'fields': ('email', 'full_name', 'role', 'phone', 'payment_model', 'profit_share_percentage',
                       'password1', 'password2', 'is_active', 'is_staff'),
        }),
    )

    readonly_fields = ['date_joined', 'updated_at', 'last_login']
