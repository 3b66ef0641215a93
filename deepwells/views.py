# -*- coding: utf-8 -*-
# deepwells/views.py

from __future__ import annotations

from django.contrib import messages
from django.db.models import Q
from django.http import JsonResponse
from django.shortcuts import get_object_or_404, redirect, render
from django.views.decorators.http import require_POST

from accounts.permissions import approved_required, browse_required, require_elevated
from deepwells.forms import DeepwellFilterForm, DeepwellForm, MonthFormSet
from deepwells.models import Deepwell
from deepwells.services.production import chart_from_db, month_label, save_deepwell
from projects.services.history import sorted_history


def _status_options() -> list[str]:
    return list(
        Deepwell.objects.exclude(status="")
        .values_list("status", flat=True)
        .distinct()
        .order_by("status")
    )


@browse_required
def deepwell_list(request):
    filters = DeepwellFilterForm(request.GET or None, statuses=_status_options())
    qs = Deepwell.objects.all()
    if filters.is_valid():
        provider = filters.cleaned_data.get("provider")
        status = filters.cleaned_data.get("status")
        q = (filters.cleaned_data.get("q") or "").strip()
        if provider:
            qs = qs.filter(provider=provider)
        if status:
            qs = qs.filter(status=status)
        if q:
            qs = qs.filter(Q(name__icontains=q) | Q(provider__icontains=q) | Q(permit__icontains=q))

    return render(request, "deepwells/deepwell_list.html", {"deepwells": qs, "filters": filters})


@browse_required
def deepwell_chart(request):
    return JsonResponse(chart_from_db())


@approved_required
def deepwell_detail(request, deepwell_id: int):
    deepwell = get_object_or_404(Deepwell.objects.prefetch_related("months"), pk=deepwell_id)
    months = [{"label": month_label(m.month), "month": m.month, "production": m.production} for m in deepwell.months.all()]
    return render(
        request,
        "deepwells/deepwell_detail.html",
        {"deepwell": deepwell, "months": months, "edit_history": sorted_history(deepwell.history)},
    )


def _edit(request, deepwell: Deepwell | None):
    instance = deepwell or Deepwell()
    if request.method == "POST":
        form = DeepwellForm(request.POST, instance=instance)
        months = MonthFormSet(request.POST, prefix="months")
        if form.is_valid() and months.is_valid():
            result = save_deepwell(
                deepwell=form.save(commit=False),
                user=request.user,
                month_rows=months.cleaned_data,
            )
            messages.success(request, "Deepwell created." if result.created else "Deepwell saved.")
            return redirect("deepwells:list")
    else:
        form = DeepwellForm(instance=instance)
        initial = []
        if deepwell is not None:
            initial = [{"month": m.month, "production": m.production} for m in deepwell.months.all()]
        months = MonthFormSet(prefix="months", initial=initial)

    return render(request, "deepwells/deepwell_form.html", {"deepwell": deepwell, "form": form, "months": months})


@approved_required
def deepwell_create(request):
    return _edit(request, None)


@approved_required
def deepwell_edit(request, deepwell_id: int):
    return _edit(request, get_object_or_404(Deepwell, pk=deepwell_id))


@require_POST
@approved_required
def deepwell_delete(request, deepwell_id: int):
    require_elevated(request.user)
    deepwell = get_object_or_404(Deepwell, pk=deepwell_id)
    name = deepwell.name
    deepwell.delete()
    messages.success(request, f"Deleted deepwell: {name}")
    return redirect("deepwells:list")
