from django.apps import AppConfig
from django.db.models.signals import post_migrate


def rebuild_after_initial_migration(sender, app_config, using='default', plan=None, verbosity=1, **kwargs):
    """Populate the titlekey table right after it is first created."""
    from titlekey.conf import get_setting
    from titlekey.storage import TitleKeyStorage, TitleKeySync

    if not get_setting('TITLEKEY_REBUILD_ON_MIGRATE'):
        return
    created = any(
        migration.app_label == app_config.label and migration.name == '0001_initial' and not backwards
        for migration, backwards in (plan or [])
    )
    if not created:
        return

    sync = TitleKeySync(TitleKeyStorage(using=using))
    last_id = sync.rebuild()
    if verbosity >= 1:
        if last_id:
            print(f"Populated titlekey table through page {last_id}.")
        else:
            print("Populated titlekey table: no pages.")


class TitleKeyConfig(AppConfig):
    default_auto_field = 'django.db.models.AutoField'
    name = 'titlekey'
    verbose_name = 'Title key index'

    def ready(self):
        from titlekey.conf import get_setting
        from titlekey.handlers import connect_handlers
        from titlekey.registry import search_hooks
        from titlekey.search import near_match, prefix_search

        connect_handlers()
        post_migrate.connect(
            rebuild_after_initial_migration, sender=self, dispatch_uid='titlekey_post_migrate'
        )

        priority = get_setting('TITLEKEY_SEARCH_PRIORITY')
        search_hooks.register_prefix_backend('titlekey', prefix_search, priority=priority)
        search_hooks.register_near_match('titlekey', near_match, priority=priority)
