from django.db import models, transaction

from titlekey.titles import Title


class Page(models.Model):
    """A wiki page. This is the primary store the title index is built from."""
    id = models.AutoField(primary_key=True)
    namespace = models.IntegerField(default=0)
    title = models.CharField(max_length=255)  # Database key form, underscores for spaces
    content = models.TextField(blank=True)
    is_redirect = models.BooleanField(default=False)
    redirect_target = models.CharField(max_length=300, blank=True)
    touched = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'page'
        constraints = [
            models.UniqueConstraint(fields=['namespace', 'title'], name='page_name_title'),
        ]

    def __str__(self):
        return self.display_name

    @property
    def title_obj(self):
        return Title.make_from_db_key(self.namespace, self.title)

    @property
    def display_name(self):
        return self.title_obj.prefixed_text

    def move_to(self, new_title, leave_redirect=True):
        """Rename this page, optionally leaving a redirect at the old title.

        Sends ``page_moved`` once both rows are in place.
        """
        from titlekey.signals import page_moved

        old_title = self.title_obj
        with transaction.atomic():
            Page.objects.filter(pk=self.pk).update(
                namespace=new_title.namespace, title=new_title.db_key
            )
            self.namespace = new_title.namespace
            self.title = new_title.db_key

            redirect_id = None
            if leave_redirect:
                redirect = Page.objects.create(
                    namespace=old_title.namespace,
                    title=old_title.db_key,
                    content=f"#REDIRECT [[{new_title.prefixed_text}]]",
                    is_redirect=True,
                    redirect_target=new_title.prefixed_text,
                )
                redirect_id = redirect.pk

        page_moved.send(
            sender=Page,
            old_title=old_title,
            new_title=new_title,
            old_page_id=redirect_id,
            new_page_id=self.pk,
        )
        return redirect_id


class TitleKey(models.Model):
    """Case-folded title key for one live page.

    The page link carries no database constraint and is not cascaded: rows are
    added and removed only by the sync layer or a rebuild.
    """
    page = models.OneToOneField(
        Page,
        primary_key=True,
        on_delete=models.DO_NOTHING,
        db_constraint=False,
        related_name='title_key',
    )
    namespace = models.IntegerField()
    key = models.CharField(max_length=255)

    class Meta:
        db_table = 'titlekey'
        indexes = [
            models.Index(fields=['namespace', 'key'], name='titlekey_name_key'),
        ]

    def __str__(self):
        return f"{self.namespace}:{self.key}"
