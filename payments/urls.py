from django.urls import path
from .views import StkPushView

urlpatterns = [
    path("stkpush", StkPushView.as_view(), name="mpesa-stkpush"),
]
