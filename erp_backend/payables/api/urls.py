# payables/api/urls.py

from django.urls import path

from payables.api.views import PayableCreateView

urlpatterns = [
    path("", PayableCreateView.as_view(), name="payables-create"),
]
