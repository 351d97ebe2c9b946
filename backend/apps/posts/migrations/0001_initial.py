# Generated migration for posts app (MySQL compatible)

from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('authentication', '0001_initial'),
        ('ai_platforms', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='Post',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('type', models.CharField(choices=[('IMAGE', '图片'), ('VIDEO', '视频')], max_length=10)),
                ('title', models.CharField(blank=True, default='', max_length=200)),
                ('prompt', models.TextField()),
                ('model_used', models.CharField(blank=True, default='', max_length=100)),
                ('video_category', models.CharField(blank=True, choices=[('IMAGE_TO_VIDEO', '图生视频'), ('TEXT_TO_VIDEO', '文生视频'), ('FRAME_INTERPOLATION', '首尾帧'), ('MULTI_IMAGE_REF', '多图参考')], max_length=30, null=True)),
                ('file_url', models.CharField(max_length=500)),
                ('original_filename', models.CharField(blank=True, default='', max_length=255)),
                ('mime_type', models.CharField(blank=True, default='', max_length=100)),
                ('size', models.BigIntegerField(default=0)),
                ('allow_download', models.BooleanField(default=False)),
                ('status', models.CharField(choices=[('VISIBLE', '可见'), ('HIDDEN', '隐藏'), ('ADMIN_DELETED', '管理员删除')], default='VISIBLE', max_length=20)),
                ('views', models.PositiveIntegerField(default=0)),
                ('likes_count', models.PositiveIntegerField(default=0)),
                ('favorites_count', models.PositiveIntegerField(default=0)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('ai_platform', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='posts', to='ai_platforms.aiplatform')),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='posts', to='authentication.user')),
            ],
            options={
                'db_table': 'posts',
                'ordering': ['-created_at'],
            },
        ),
        migrations.AddIndex(
            model_name='post',
            index=models.Index(fields=['status', 'created_at'], name='posts_status_created_idx'),
        ),
        migrations.AddIndex(
            model_name='post',
            index=models.Index(fields=['user', 'status'], name='posts_user_status_idx'),
        ),
        migrations.AddIndex(
            model_name='post',
            index=models.Index(fields=['ai_platform'], name='posts_platform_idx'),
        ),
    ]
