"""Forms for sign-in, adding staff/students, and editing users."""
from __future__ import annotations

from django import forms
from django.contrib.auth import get_user_model
from django.contrib.auth.forms import AuthenticationForm
from django.contrib.auth.password_validation import validate_password

from academics.models import Department
from .models import Profile, Role, Year

User = get_user_model()

STATES_OF_INDIA = [
    "Andhra Pradesh", "Arunachal Pradesh", "Assam", "Bihar", "Chhattisgarh",
    "Goa", "Gujarat", "Haryana", "Himachal Pradesh", "Jharkhand", "Karnataka",
    "Kerala", "Madhya Pradesh", "Maharashtra", "Manipur", "Meghalaya", "Mizoram",
    "Nagaland", "Odisha", "Punjab", "Rajasthan", "Sikkim", "Tamil Nadu",
    "Telangana", "Tripura", "Uttar Pradesh", "Uttarakhand", "West Bengal",
]
COUNTRIES = ["India", "United States", "Canada", "United Kingdom", "Australia", "Germany", "France"]


class EmailAuthenticationForm(AuthenticationForm):
    """Sign in with e-mail and password.

    The e-mail is mapped to the account's username before Django's
    authentication backend runs.
    """

    error_messages = {
        **AuthenticationForm.error_messages,
        "invalid_login": "Login Failed: invalid e-mail or password.",
    }

    def __init__(self, request=None, *args, **kwargs):
        super().__init__(request, *args, **kwargs)
        self.fields["username"].label = "Email"
        self.fields["username"].widget.attrs["placeholder"] = "Enter your email"
        self.fields["password"].widget.attrs["placeholder"] = "Enter your password"

    def clean(self):
        login = (self.cleaned_data.get("username") or "").strip()
        if "@" in login:
            user = User.objects.filter(email__iexact=login).first()
            if user:
                self.cleaned_data["username"] = user.get_username()
        return super().clean()


class _NewAccountForm(forms.Form):
    """Fields shared by the add-student and add-teacher forms."""

    first_name = forms.CharField(max_length=100)
    last_name = forms.CharField(max_length=100)
    email = forms.EmailField()
    password = forms.CharField(widget=forms.PasswordInput, strip=False)
    department = forms.ModelChoiceField(queryset=Department.objects.all())
    phone_number = forms.CharField(max_length=20, required=False)

    def clean_email(self):
        email = (self.cleaned_data.get("email") or "").strip().lower()
        if User.objects.filter(email__iexact=email).exists():
            raise forms.ValidationError("An account with this e-mail already exists.")
        return email

    def clean(self):
        cleaned = super().clean()
        password = cleaned.get("password")
        if password:
            candidate = User(username=self.username_for(cleaned), email=cleaned.get("email") or "")
            try:
                validate_password(password, candidate)
            except forms.ValidationError as exc:
                self.add_error("password", exc)
        return cleaned

    def username_for(self, cleaned: dict) -> str:
        raise NotImplementedError

    def profile_fields(self, cleaned: dict) -> dict:
        raise NotImplementedError

    role: Role = Role.STUDENT

    def save(self) -> User:
        """Create the auth user and its profile; caller wraps in a transaction."""
        cleaned = self.cleaned_data
        user = User.objects.create_user(
            username=self.username_for(cleaned),
            email=cleaned["email"],
            password=cleaned["password"],
            first_name=cleaned["first_name"],
            last_name=cleaned["last_name"],
        )
        Profile.objects.create(
            user=user,
            role=self.role,
            first_name=cleaned["first_name"],
            last_name=cleaned["last_name"],
            department=cleaned["department"],
            phone_number=cleaned.get("phone_number") or "",
            **self.profile_fields(cleaned),
        )
        return user


class AddStudentForm(_NewAccountForm):
    role = Role.STUDENT

    roll_number = forms.CharField(max_length=50)
    year = forms.ChoiceField(choices=Year.choices)
    parent_phone_number = forms.CharField(max_length=20, required=False)
    house_no = forms.CharField(max_length=50, required=False)
    street_name = forms.CharField(max_length=200, required=False)
    city_name = forms.CharField(max_length=100)
    district_name = forms.CharField(max_length=100, required=False, initial="Chennai")
    state_name = forms.ChoiceField(choices=[(s, s) for s in STATES_OF_INDIA], initial="Tamil Nadu")
    country_name = forms.ChoiceField(choices=[(c, c) for c in COUNTRIES], initial="India")
    tenth_school_name = forms.CharField(max_length=200, required=False)
    tenth_mark_score = forms.IntegerField(min_value=0, max_value=100, required=False)
    twelfth_school_name = forms.CharField(max_length=200, required=False)
    twelfth_mark_score = forms.IntegerField(min_value=0, max_value=100, required=False)

    def clean_roll_number(self):
        roll = (self.cleaned_data.get("roll_number") or "").strip()
        if Profile.objects.filter(roll_number__iexact=roll).exists() or User.objects.filter(username__iexact=roll).exists():
            raise forms.ValidationError("This roll number is already registered.")
        return roll

    def username_for(self, cleaned: dict) -> str:
        return cleaned.get("roll_number") or ""

    def profile_fields(self, cleaned: dict) -> dict:
        keys = (
            "roll_number", "year", "parent_phone_number", "house_no", "street_name",
            "city_name", "district_name", "state_name", "country_name",
            "tenth_school_name", "tenth_mark_score", "twelfth_school_name", "twelfth_mark_score",
        )
        fields = {k: cleaned.get(k) for k in keys}
        for k in ("parent_phone_number", "house_no", "street_name", "district_name",
                  "tenth_school_name", "twelfth_school_name"):
            fields[k] = fields[k] or ""
        return fields


class AddTeacherForm(_NewAccountForm):
    role = Role.TEACHER

    username = forms.CharField(max_length=150, required=False, help_text="Defaults to the employee code.")
    employee_id = forms.CharField(max_length=50, label="Employee code")
    designation = forms.CharField(max_length=100, required=False)
    highest_degree = forms.CharField(max_length=100, required=False)
    years_of_experience = forms.IntegerField(min_value=0, max_value=60, required=False)
    specialization = forms.CharField(max_length=200, required=False)

    def clean_employee_id(self):
        code = (self.cleaned_data.get("employee_id") or "").strip()
        if Profile.objects.filter(employee_id__iexact=code).exists():
            raise forms.ValidationError("This employee code is already registered.")
        return code

    def clean(self):
        cleaned = super().clean()
        username = self.username_for(cleaned)
        if username and User.objects.filter(username__iexact=username).exists():
            self.add_error("username", "This username is already taken.")
        return cleaned

    def username_for(self, cleaned: dict) -> str:
        return (cleaned.get("username") or "").strip() or cleaned.get("employee_id") or ""

    def profile_fields(self, cleaned: dict) -> dict:
        return {
            "employee_id": cleaned["employee_id"],
            "designation": cleaned.get("designation") or "",
            "highest_degree": cleaned.get("highest_degree") or "",
            "years_of_experience": cleaned.get("years_of_experience"),
            "specialization": cleaned.get("specialization") or "",
        }


class EditUserForm(forms.ModelForm):
    """Super-admin edit of every profile field plus the account identity."""

    username = forms.CharField(max_length=150)
    email = forms.EmailField()

    class Meta:
        model = Profile
        fields = (
            "role", "first_name", "last_name", "employee_id", "roll_number", "department", "year",
            "designation", "phone_number", "parent_phone_number", "house_no", "street_name",
            "city_name", "district_name", "state_name", "country_name", "tenth_school_name",
            "tenth_mark_score", "twelfth_school_name", "twelfth_mark_score", "highest_degree",
            "years_of_experience", "specialization",
        )

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        user = self.instance.user
        self.fields["username"].initial = user.username
        self.fields["email"].initial = user.email

    def clean_username(self):
        username = (self.cleaned_data.get("username") or "").strip()
        if User.objects.filter(username__iexact=username).exclude(pk=self.instance.user_id).exists():
            raise forms.ValidationError("This username is already taken.")
        return username

    def clean_email(self):
        email = (self.cleaned_data.get("email") or "").strip().lower()
        if User.objects.filter(email__iexact=email).exclude(pk=self.instance.user_id).exists():
            raise forms.ValidationError("This e-mail is already in use.")
        return email

    def _blank_to_none(self, name: str):
        return (self.cleaned_data.get(name) or "").strip() or None

    def clean_employee_id(self):
        return self._blank_to_none("employee_id")

    def clean_roll_number(self):
        return self._blank_to_none("roll_number")

    def save(self, commit: bool = True) -> Profile:
        profile: Profile = super().save(commit=False)
        user = profile.user
        user.username = self.cleaned_data["username"]
        user.email = self.cleaned_data["email"]
        user.first_name = profile.first_name
        user.last_name = profile.last_name
        if commit:
            user.save(update_fields=["username", "email", "first_name", "last_name"])
            profile.save()
        return profile
