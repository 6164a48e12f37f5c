import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    dependencies = [
        ('inventory', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='CarLike',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('car', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='likes', to='inventory.car')),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='car_likes', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'Car Like',
                'verbose_name_plural': 'Car Likes',
                'ordering': ['-created_at'],
                'constraints': [models.UniqueConstraint(fields=('user', 'car'), name='unique_car_like')],
            },
        ),
    ]
