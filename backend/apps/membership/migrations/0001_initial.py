# Generated migration for membership app (MySQL compatible)

from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('authentication', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='MembershipProduct',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('title', models.CharField(max_length=100)),
                ('description', models.TextField(blank=True, default='')),
                ('price', models.DecimalField(decimal_places=2, max_digits=10)),
                ('duration_days', models.PositiveIntegerField()),
                ('type', models.CharField(choices=[('PREMIUM_MONTHLY', '月度会员'), ('PREMIUM_QUARTERLY', '季度会员'), ('PREMIUM_ANNUAL', '年度会员'), ('LIFETIME', '终身会员')], max_length=20)),
                ('is_active', models.BooleanField(default=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'db_table': 'membership_products',
                'ordering': ['-created_at'],
            },
        ),
        migrations.CreateModel(
            name='RedemptionCode',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('code', models.CharField(max_length=32, unique=True)),
                ('duration_days', models.PositiveIntegerField()),
                ('is_used', models.BooleanField(default=False)),
                ('used_at', models.DateTimeField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('used_by_user', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='redeemed_codes', to='authentication.user')),
            ],
            options={
                'db_table': 'redemption_codes',
                'ordering': ['-created_at'],
            },
        ),
        migrations.AddIndex(
            model_name='redemptioncode',
            index=models.Index(fields=['is_used'], name='redemption_used_idx'),
        ),
    ]
