# apps/projects/forms.py

from django import forms

from apps.core.models import Project


class ProjectForm(forms.ModelForm):
    """Validates the body of ``POST /add-project``"""

    # Plain text so any casing of a known status is accepted
    status = forms.CharField(label='Status', max_length=50)

    class Meta:
        model = Project
        fields = ['student_name', 'project_title', 'status']
        labels = {
            'student_name': 'Student name',
            'project_title': 'Project title',
        }

    def clean_status(self):
        """Maps ``ongoing``/``ONGOING``/... to the stored ``Ongoing``"""
        status = self.cleaned_data['status'].strip()
        for value, _ in Project.STATUS_CHOICES:
            if value.lower() == status.lower():
                return value

        valid = ', '.join(value for value, _ in Project.STATUS_CHOICES)
        raise forms.ValidationError(f'Must be one of {valid}')
