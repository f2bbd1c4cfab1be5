from django import forms
from apps.core.forms import ApiModelForm
from .models import Article


class ArticleForm(ApiModelForm):
    class Meta:
        model = Article
        fields = ['title', 'slug', 'excerpt', 'body', 'category', 'localized_titles', 'published', 'published_at']

    def clean_localized_titles(self):
        titles = self.cleaned_data.get('localized_titles') or {}
        if not isinstance(titles, dict) or not all(isinstance(v, str) for v in titles.values()):
            raise forms.ValidationError("Localized titles must map a language code to a title")
        return titles


class ContactForm(forms.Form):
    name = forms.CharField(max_length=200)
    email = forms.EmailField()
    message = forms.CharField(max_length=5000)
