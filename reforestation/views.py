# -*- coding: utf-8 -*-
# reforestation/views.py

from __future__ import annotations

from django.contrib import messages
from django.db.models import Q
from django.shortcuts import get_object_or_404, redirect, render
from django.views.decorators.http import require_POST

from accounts.permissions import approved_required, browse_required, require_admin
from projects.services.editing import compress_photos
from projects.services.history import sorted_history
from reforestation.forms import ReforestationFilterForm, ReforestationForm
from reforestation.models import ReforestationActivity
from reforestation.services.activities import delete_activity, save_activity
from uploads.services import ImageProcessingError


def _distinct(field: str) -> list[str]:
    return list(
        ReforestationActivity.objects.exclude(**{field: ""})
        .values_list(field, flat=True)
        .distinct()
        .order_by(field)
    )


@browse_required
def activity_list(request):
    filters = ReforestationFilterForm(
        request.GET or None,
        types=_distinct("activity_type"),
        statuses=_distinct("status"),
    )
    qs = ReforestationActivity.objects.all()
    if filters.is_valid():
        activity_type = filters.cleaned_data.get("activity_type")
        status = filters.cleaned_data.get("status")
        q = (filters.cleaned_data.get("q") or "").strip()
        if activity_type:
            qs = qs.filter(activity_type=activity_type)
        if status:
            qs = qs.filter(status=status)
        if q:
            qs = qs.filter(Q(activity_name__icontains=q) | Q(location__icontains=q))

    return render(request, "reforestation/activity_list.html", {"activities": qs, "filters": filters})


@approved_required
def activity_detail(request, activity_id: int):
    activity = get_object_or_404(ReforestationActivity.objects.prefetch_related("photos"), pk=activity_id)
    return render(
        request,
        "reforestation/activity_detail.html",
        {"activity": activity, "edit_history": sorted_history(activity.history)},
    )


def _edit(request, activity: ReforestationActivity | None):
    instance = activity or ReforestationActivity()
    if request.method == "POST":
        form = ReforestationForm(request.POST, request.FILES, instance=instance)
        if form.is_valid():
            try:
                compressed = compress_photos(form.cleaned_data.get("photos"))
            except ImageProcessingError as exc:
                form.add_error("photos", str(exc))
            else:
                result = save_activity(
                    activity=form.save(commit=False),
                    user=request.user,
                    photos=compressed,
                    kmz=form.cleaned_data.get("kmz_file"),
                )
                messages.success(request, "Activity created." if result.created else "Activity saved.")
                return redirect("reforestation:list")
    else:
        form = ReforestationForm(instance=instance)

    return render(request, "reforestation/activity_form.html", {"activity": activity, "form": form})


@approved_required
def activity_create(request):
    return _edit(request, None)


@approved_required
def activity_edit(request, activity_id: int):
    return _edit(request, get_object_or_404(ReforestationActivity, pk=activity_id))


@require_POST
@approved_required
def activity_delete(request, activity_id: int):
    require_admin(request.user)
    activity = get_object_or_404(ReforestationActivity, pk=activity_id)
    name = activity.activity_name
    delete_activity(activity)
    messages.success(request, f"Deleted activity: {name}")
    return redirect("reforestation:list")
