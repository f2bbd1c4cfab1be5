from django.urls import path
from . import views

urlpatterns = [
    path('newsletter/subscribe', views.subscribe_view, name='newsletter_subscribe'),
    path('newsletter/confirm', views.confirm_view, name='newsletter_confirm'),
    path('newsletter/unsubscribe', views.unsubscribe_view, name='newsletter_unsubscribe'),
    path('newsletter/campaigns', views.public_campaigns_view, name='newsletter_campaigns'),
    path('admin/newsletter-campaigns', views.admin_campaigns_view, name='admin_newsletter_campaigns'),
    path('admin/newsletter-campaigns/send', views.admin_send_campaign_view, name='admin_newsletter_send'),
    path('cron/send-newsletters', views.cron_send_newsletters, name='cron_send_newsletters'),
]
