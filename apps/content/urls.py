from django.urls import path
from . import views

urlpatterns = [
    path('articles', views.articles_view, name='articles'),
    path('articles/<slug:slug>', views.article_detail_view, name='article_detail'),
    path('contact', views.contact_view, name='contact'),
]
