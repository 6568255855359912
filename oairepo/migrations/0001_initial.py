from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='ResumptionToken',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('token_id', models.CharField(max_length=32, unique=True)),
                ('verb', models.TextField()),
                ('metadata_prefix', models.TextField(blank=True)),
                ('from_arg', models.TextField(blank=True)),
                ('until_arg', models.TextField(blank=True)),
                ('set_spec', models.TextField(blank=True)),
                ('cursor', models.PositiveIntegerField()),
                ('complete_list_size', models.PositiveIntegerField()),
                ('created', models.DateTimeField(auto_now_add=True)),
                ('expiration', models.DateTimeField()),
            ],
            options={
                'indexes': [models.Index(fields=['expiration'], name='oairepo_token_expiration_idx')],
            },
        ),
    ]
