from django.urls import include, path

urlpatterns = [
    path("api/chaincode/", include("energy_trading.urls")),
]
