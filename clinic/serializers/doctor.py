from rest_framework import serializers

from clinic.models import Doctor
from clinic.serializers.fields import EnumChoiceField, clean_text, required_id
from clinic.serializers.patient import FULL_NAME_ERRORS, clean_full_name


class DoctorCreateSerializer(serializers.Serializer):
    full_name = serializers.CharField(max_length=120, error_messages=FULL_NAME_ERRORS)
    department_id = required_id('department_id')
    status = EnumChoiceField(Doctor.Status, required=False)
    specialty = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=120)
    email = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=160)
    phone = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=40)

    def validate_full_name(self, v):
        return clean_full_name(v)

    def validate_specialty(self, v):
        return clean_text(v, field_name='specialty', max_length=120)

    def validate_email(self, v):
        return clean_text(v, field_name='email', max_length=160)

    def validate_phone(self, v):
        return clean_text(v, field_name='phone', max_length=40)
