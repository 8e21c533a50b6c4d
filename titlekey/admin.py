from django.contrib import admin

from .models import Page, TitleKey


@admin.register(Page)
class PageAdmin(admin.ModelAdmin):
    list_display = ('id', 'namespace', 'title', 'is_redirect', 'touched')
    list_filter = ('namespace', 'is_redirect')
    search_fields = ('title',)


@admin.register(TitleKey)
class TitleKeyAdmin(admin.ModelAdmin):
    list_display = ('page_id', 'namespace', 'key')
    list_filter = ('namespace',)
    search_fields = ('key',)
    readonly_fields = ('page', 'namespace', 'key')
