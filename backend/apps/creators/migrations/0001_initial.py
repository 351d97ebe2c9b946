# Generated migration for creators app (MySQL compatible)

from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('authentication', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='Creator',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('nickname', models.CharField(max_length=50)),
                ('avatar_url', models.CharField(blank=True, max_length=500, null=True)),
                ('bio', models.TextField(blank=True, default='')),
                ('expertise', models.CharField(blank=True, default='', max_length=200)),
                ('background_url', models.CharField(blank=True, default='', max_length=500)),
                ('images', models.JSONField(blank=True, default=list)),
                ('videos', models.JSONField(blank=True, default=list)),
                ('audios', models.JSONField(blank=True, default=list)),
                ('score', models.IntegerField(default=0)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('user', models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name='creator', to='authentication.user')),
            ],
            options={
                'db_table': 'creators',
                'ordering': ['-score', 'id'],
                'indexes': [
                    models.Index(fields=['score'], name='creators_score_idx'),
                ],
            },
        ),
    ]
