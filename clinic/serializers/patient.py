from rest_framework import serializers

from clinic.models import Patient


class PatientSerializer(serializers.ModelSerializer):
    class Meta:
        model = Patient
        fields = ['id', 'name', 'date_of_birth', 'sick', 'score']
        read_only_fields = fields


class PatientListQuerySerializer(serializers.Serializer):
    keyword = serializers.CharField(required=False, allow_blank=True, max_length=100)
    page = serializers.IntegerField(required=False, min_value=1)

    def validate_keyword(self, v):
        return (v or '').strip()
