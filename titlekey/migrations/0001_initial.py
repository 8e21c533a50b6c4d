# Initial schema: page table and the titlekey index

from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
    ]

    operations = [
        migrations.CreateModel(
            name='Page',
            fields=[
                ('id', models.AutoField(primary_key=True, serialize=False)),
                ('namespace', models.IntegerField(default=0)),
                ('title', models.CharField(max_length=255)),
                ('content', models.TextField(blank=True)),
                ('is_redirect', models.BooleanField(default=False)),
                ('redirect_target', models.CharField(blank=True, max_length=300)),
                ('touched', models.DateTimeField(auto_now=True)),
            ],
            options={
                'db_table': 'page',
            },
        ),
        migrations.AddConstraint(
            model_name='page',
            constraint=models.UniqueConstraint(fields=('namespace', 'title'), name='page_name_title'),
        ),
        migrations.CreateModel(
            name='TitleKey',
            fields=[
                ('page', models.OneToOneField(
                    db_constraint=False,
                    on_delete=django.db.models.deletion.DO_NOTHING,
                    primary_key=True,
                    related_name='title_key',
                    serialize=False,
                    to='titlekey.page',
                )),
                ('namespace', models.IntegerField()),
                ('key', models.CharField(max_length=255)),
            ],
            options={
                'db_table': 'titlekey',
                'indexes': [models.Index(fields=['namespace', 'key'], name='titlekey_name_key')],
            },
        ),
    ]
