# apps/projects/views.py

import logging

from django.http import JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_http_methods, require_POST

from apps.core.models import Project
from apps.core.utils import error_response, first_form_error, parse_json_body
from .forms import ProjectForm

logger = logging.getLogger(__name__)


@require_GET
def list_projects(request):
    """
    Every project, newest id first

    The client treats this list as a full snapshot and replaces its cache
    with it after every mutation.
    """
    try:
        projects = [project.to_dict() for project in Project.objects.order_by('-id')]
    except Exception:
        logger.exception("Failed to list projects")
        return error_response('Failed to load projects', 500)

    return JsonResponse(projects, safe=False)


@csrf_exempt
@require_POST
def add_project(request):
    """
    Creates a project from ``{student_name, project_title, status}``
    """
    form = ProjectForm(data=parse_json_body(request))

    if not form.is_valid():
        return error_response(first_form_error(form), 400)

    try:
        project = form.save()
    except Exception:
        logger.exception("Failed to add project")
        return error_response('Failed to add project', 500)

    logger.info("Project %s created: %s", project.id, project.project_title)
    return JsonResponse({'message': 'Project added successfully', 'id': project.id})


@csrf_exempt
@require_http_methods(['DELETE'])
def delete_project(request, project_id):
    """
    Deletes a project; deleting an unknown id is a no-op
    """
    try:
        deleted, _ = Project.objects.filter(id=project_id).delete()
    except Exception:
        logger.exception("Failed to delete project %s", project_id)
        return error_response('Failed to delete project', 500)

    if deleted:
        logger.info("Project %s deleted", project_id)

    return JsonResponse({'message': 'Project deleted successfully'})
