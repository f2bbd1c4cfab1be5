# apps/content/views.py
import logging

from django.conf import settings
from django.http import JsonResponse

from apps.core.api import bind_form, get_record_id, json_endpoint, model_to_json, parse_json, require_staff
from apps.core.exceptions import NotFound, Unauthorized, ValidationFailed
from apps.core.notifications import queue_email
from .forms import ArticleForm, ContactForm
from .models import Article

logger = logging.getLogger(__name__)


def article_summary(article, lang=None):
    return {
        'id': article.pk,
        'title': article.title_for(lang),
        'slug': article.slug,
        'excerpt': article.excerpt,
        'category': article.category,
        'published_at': article.published_at,
    }


@json_endpoint('GET', 'POST', 'PUT', 'DELETE', public=True)
def articles_view(request):
    if request.method == 'GET':
        articles = Article.objects.filter(published=True)
        if request.GET.get('category'):
            articles = articles.filter(category=request.GET['category'])
        lang = request.GET.get('lang')
        return JsonResponse({'articles': [article_summary(a, lang) for a in articles]})

    # Mutations are staff only
    if not request.user.is_authenticated:
        raise Unauthorized()
    require_staff(request.user)
    payload = parse_json(request)

    if request.method == 'POST':
        if not payload.get('title') or not payload.get('body'):
            raise ValidationFailed('title and body are required')
        article = bind_form(ArticleForm, payload, request.user).save()
        return JsonResponse(model_to_json(article), status=201)

    article = Article.objects.filter(pk=get_record_id(request, payload)).first()
    if article is None:
        raise NotFound('Article not found')

    if request.method == 'PUT':
        article = bind_form(ArticleForm, payload, request.user, instance=article).save()
        return JsonResponse(model_to_json(article))

    article.delete()
    return JsonResponse({'success': True})


@json_endpoint('GET', public=True)
def article_detail_view(request, slug):
    article = Article.objects.filter(slug=slug, published=True).first()
    if article is None:
        raise NotFound('Article not found')
    data = model_to_json(article)
    data['title'] = article.title_for(request.GET.get('lang'))
    return JsonResponse({'article': data})


@json_endpoint('POST', public=True)
def contact_view(request):
    form = ContactForm(data=parse_json(request))
    if not form.is_valid():
        raise ValidationFailed('Validation failed', details=form.errors.get_json_data())

    if not settings.ADMIN_EMAIL:
        logger.error("Contact form used but ADMIN_EMAIL is not set")
        raise ValidationFailed('Contact form is not available')

    data = form.cleaned_data
    queue_email(
        settings.ADMIN_EMAIL,
        f"Zpráva z kontaktního formuláře: {data['name']}",
        'contact_message',
        {'name': data['name'], 'email': data['email'], 'message': data['message']},
        reply_to=data['email'],
    )
    return JsonResponse({'success': True})
