# apps/content/models.py
from django.db import models
from django.utils import timezone
from django.utils.text import slugify


class Article(models.Model):
    title = models.CharField(max_length=255)
    slug = models.SlugField(max_length=255, unique=True, blank=True)
    excerpt = models.TextField(blank=True)
    body = models.TextField()
    category = models.CharField(max_length=100, blank=True)
    # {"en": "Title", "de": "Titel"}; the base title is Czech
    localized_titles = models.JSONField(default=dict, blank=True)

    published = models.BooleanField(default=False)
    published_at = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-published_at', '-created_at']

    def __str__(self):
        return self.title

    def title_for(self, lang=None):
        if lang and (self.localized_titles or {}).get(lang):
            return self.localized_titles[lang]
        return self.title

    def save(self, *args, **kwargs):
        if not self.slug:
            self.slug = unique_slug(self.title, exclude_pk=self.pk)
        if self.published and not self.published_at:
            self.published_at = timezone.now()
        super().save(*args, **kwargs)


def unique_slug(title, exclude_pk=None):
    base = slugify(title) or 'clanek'
    slug, counter = base, 1
    taken = Article.objects.exclude(pk=exclude_pk) if exclude_pk else Article.objects.all()
    while taken.filter(slug=slug).exists():
        counter += 1
        slug = f"{base}-{counter}"
    return slug
