from django.urls import path
from .views import InvokeView, QueryView

urlpatterns = [
    path("invoke/", InvokeView.as_view(), name="chaincode-invoke"),
    path("query/", QueryView.as_view(), name="chaincode-query"),
]
