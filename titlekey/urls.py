from django.urls import path

from . import views

urlpatterns = [
    path('suggest/', views.suggest, name='title_suggest'),
    path('go/', views.go, name='title_go'),
    path('wiki/<path:title>', views.page_view, name='page_view'),
]
