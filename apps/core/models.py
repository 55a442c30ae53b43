# apps/core/models.py

from django.contrib.auth.models import AbstractUser
from django.db import models


class Usuario(AbstractUser):
    """
    Custom user for the student project monitor

    Registration only asks for a full name, a username and a password,
    so ``full_name`` replaces the first/last name pair for display.
    """

    ROLE_CHOICES = [
        ('user', 'User'),
        ('admin', 'Administrator'),
    ]

    full_name = models.CharField(max_length=100)
    role = models.CharField(max_length=30, choices=ROLE_CHOICES, default='user')
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'users'

    def get_full_name(self):
        return self.full_name or super().get_full_name()

    def to_public_dict(self):
        """Public projection returned by the auth endpoints (never the password)"""
        return {
            'id': self.id,
            'full_name': self.full_name,
            'username': self.username,
            'role': self.role,
        }

    def __str__(self):
        if self.full_name:
            return f"{self.full_name} ({self.username})"
        return self.username


class Project(models.Model):
    """A tracked student project"""

    STATUS_PROPOSAL = 'Proposal'
    STATUS_ONGOING = 'Ongoing'
    STATUS_COMPLETED = 'Completed'

    STATUS_CHOICES = [
        (STATUS_PROPOSAL, 'Proposal'),
        (STATUS_ONGOING, 'Ongoing'),
        (STATUS_COMPLETED, 'Completed'),
    ]

    student_name = models.CharField(max_length=100)
    project_title = models.CharField(max_length=255)
    status = models.CharField(max_length=50, choices=STATUS_CHOICES)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'projects'
        ordering = ['-id']

    def to_dict(self):
        """Wire representation used by ``GET /projects``"""
        return {
            'id': self.id,
            'student_name': self.student_name,
            'project_title': self.project_title,
            'status': self.status,
            'created_at': self.created_at.isoformat() if self.created_at else None,
        }

    def __str__(self):
        return f"{self.project_title} - {self.student_name}"
