from rest_framework import serializers

from clinic.models import Patient
from clinic.serializers.fields import ClampedIntegerField, EnumChoiceField, LenientDateField, clean_text

FULL_NAME_ERRORS = {
    'required': 'full_name is required',
    'blank': 'full_name is required',
    'null': 'full_name is required',
    'invalid': 'full_name is required',
    'max_length': 'full_name must be at most 120 characters',
}


def clean_full_name(v):
    return clean_text(v, field_name='full_name', max_length=120, required=True)


class PatientCreateSerializer(serializers.Serializer):
    full_name = serializers.CharField(max_length=120, error_messages=FULL_NAME_ERRORS)
    patient_code = serializers.CharField(
        required=False, allow_blank=True, allow_null=True, max_length=20,
        error_messages={'max_length': 'patient_code must be at most 20 characters'},
    )
    gender = EnumChoiceField(Patient.Gender, required=False)
    status = EnumChoiceField(Patient.Status, required=False)
    phone = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=40)
    dob = LenientDateField(required=False)

    def validate_full_name(self, v):
        return clean_full_name(v)

    def validate_phone(self, v):
        return clean_text(v, field_name='phone', max_length=40)


class ListQuerySerializer(serializers.Serializer):
    # 0 and blank mean "use the endpoint default"
    limit = ClampedIntegerField(min_value=0, max_value=100, error_messages={'invalid': 'limit must be a number'})
