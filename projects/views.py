# -*- coding: utf-8 -*-
# projects/views.py

from __future__ import annotations

import logging

from django.contrib import messages
from django.db.models import Q
from django.http import JsonResponse
from django.shortcuts import get_object_or_404, redirect, render
from django.views.decorators.http import require_POST

from accounts.permissions import (
    approved_required,
    browse_required,
    can_delete,
    require_elevated,
)
from projects.forms import (
    AccomplishmentEntryForm,
    BillingFormSet,
    ProjectFilterForm,
    ProjectForm,
    ProjectPhotosForm,
)
from projects.models import Project
from projects.services.editing import compress_photos, delete_project, save_project
from projects.services.history import sorted_history
from projects.services.progress import history_rows, latest_percent, s_curve_points, snapshot_initial
from projects.services.status import derive_status, status_matches
from uploads.services import ImageProcessingError

logger = logging.getLogger("dashboard.projects")


def _agency_options() -> list[str]:
    values = (
        Project.objects.exclude(implementing_agency="")
        .values_list("implementing_agency", flat=True)
        .distinct()
        .order_by("implementing_agency")
    )
    return list(values)


@browse_required
def project_list(request):
    filters = ProjectFilterForm(request.GET or None, agencies=_agency_options())
    q = agency = wanted_status = ""
    if filters.is_valid():
        q = (filters.cleaned_data.get("q") or "").strip()
        agency = filters.cleaned_data.get("agency") or ""
        wanted_status = filters.cleaned_data.get("status") or ""

    qs = Project.objects.prefetch_related("accomplishments")
    if q:
        qs = qs.filter(Q(name__icontains=q) | Q(contractor__icontains=q))
    if agency:
        qs = qs.filter(implementing_agency=agency)

    rows = []
    for p in qs:
        entries = list(p.accomplishments.all())
        status = derive_status(entries, p.original_completion, p.revised_completion)
        if not status_matches(status, wanted_status):
            continue
        rows.append({"project": p, "status": status, "percent": latest_percent(entries)})

    return render(
        request,
        "projects/project_list.html",
        {"rows": rows, "filters": filters},
    )


@approved_required
def project_detail(request, project_id: int):
    project = get_object_or_404(
        Project.objects.prefetch_related("accomplishments", "billing_entries", "photos"),
        pk=project_id,
    )
    entries = list(project.accomplishments.all())
    return render(
        request,
        "projects/project_detail.html",
        {
            "project": project,
            "status": derive_status(entries, project.original_completion, project.revised_completion),
            "history_rows": history_rows(entries, project_issues=project.issues),
            "edit_history": sorted_history(project.history),
            "show_contract_docs": can_delete(request.user),
        },
    )


@approved_required
def project_s_curve(request, project_id: int):
    project = get_object_or_404(Project, pk=project_id)
    return JsonResponse({"project_id": project.pk, "points": s_curve_points(project.accomplishments.all())})


def _edit(request, project: Project | None):
    elevated = can_delete(request.user)
    instance = project or Project()

    if request.method == "POST":
        form = ProjectForm(request.POST, instance=instance, elevated=elevated)
        entry_form = AccomplishmentEntryForm(request.POST, prefix="acc")
        billing = BillingFormSet(request.POST, prefix="billing")
        photos_form = ProjectPhotosForm(request.POST, request.FILES)

        if all(f.is_valid() for f in (form, entry_form, billing, photos_form)):
            compressed = None
            try:
                compressed = compress_photos(photos_form.cleaned_data.get("photos"))
            except ImageProcessingError as exc:
                photos_form.add_error("photos", str(exc))
            else:
                obj = form.save(commit=False)
                result = save_project(
                    project=obj,
                    user=request.user,
                    snapshot=entry_form.snapshot(obj),
                    billing_rows=billing.cleaned_data,
                    photos=compressed,
                )
                messages.success(request, "Project saved." if not result.created else "Project created.")
                return redirect("projects:detail", project_id=result.project_id)
    else:
        form = ProjectForm(instance=instance, elevated=elevated)
        entry_form = AccomplishmentEntryForm(prefix="acc", initial=snapshot_initial(project))
        billing_initial = []
        if project is not None:
            billing_initial = [
                {"date": b.date, "amount": b.amount, "description": b.description}
                for b in project.billing_entries.all()
            ]
        billing = BillingFormSet(prefix="billing", initial=billing_initial)
        photos_form = ProjectPhotosForm()

    return render(
        request,
        "projects/project_form.html",
        {
            "project": project,
            "form": form,
            "entry_form": entry_form,
            "billing": billing,
            "photos_form": photos_form,
        },
    )


@approved_required
def project_create(request):
    return _edit(request, None)


@approved_required
def project_edit(request, project_id: int):
    project = get_object_or_404(Project, pk=project_id)
    return _edit(request, project)


@require_POST
@approved_required
def project_delete(request, project_id: int):
    require_elevated(request.user)
    project = get_object_or_404(Project, pk=project_id)
    name = project.name
    delete_project(project)
    messages.success(request, f"Deleted project: {name}")
    return redirect("projects:list")
