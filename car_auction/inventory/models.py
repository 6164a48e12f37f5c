from django.db import models
from django.contrib.auth import get_user_model

User = get_user_model()


class Car(models.Model):
    BODY_TYPES = [
        ('sedan', 'Sedan'),
        ('suv', 'SUV'),
        ('truck', 'Truck'),
        ('coupe', 'Coupe'),
        ('hatchback', 'Hatchback'),
        ('convertible', 'Convertible'),
        ('wagon', 'Wagon'),
        ('van', 'Van'),
        ('other', 'Other'),
    ]
    FUEL_TYPES = (
        ('electric', 'Electric'),
        ('hybrid', 'Hybrid'),
        ('petrol', 'Petrol'),
        ('diesel', 'Diesel'),
    )
    CONDITIONS = [
        ('new', 'New'),
        ('used', 'Used'),
    ]
    EURO_STANDARDS = [(f'euro_{n}', f'Euro {n}') for n in range(1, 7)]

    # core fields
    make = models.CharField(max_length=100, db_index=True)
    model = models.CharField(max_length=100, db_index=True)
    year = models.IntegerField()
    mileage = models.IntegerField()
    power = models.IntegerField(null=True, blank=True)  # hp
    fuel_type = models.CharField(max_length=20, choices=FUEL_TYPES, db_index=True)
    body_type = models.CharField(max_length=20, choices=BODY_TYPES, default='sedan', db_index=True)
    condition = models.CharField(max_length=20, choices=CONDITIONS, default='used')
    euro_standard = models.CharField(max_length=10, choices=EURO_STANDARDS, null=True, blank=True)
    description = models.TextField(blank=True, null=True)
    specs = models.TextField(blank=True, null=True)

    # location
    address_line = models.CharField(max_length=200, blank=True, null=True)
    zipcode = models.CharField(max_length=20, blank=True, null=True)
    city = models.CharField(max_length=100, blank=True, null=True)

    posted_by = models.ForeignKey(User, on_delete=models.CASCADE, related_name='posted_cars', db_index=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.year} {self.make} {self.model}"


class CarLike(models.Model):
    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name='car_likes')
    car = models.ForeignKey(Car, on_delete=models.CASCADE, related_name='likes')
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-created_at']
        constraints = [
            models.UniqueConstraint(fields=['user', 'car'], name='unique_car_like'),
        ]
        verbose_name = 'Car Like'
        verbose_name_plural = 'Car Likes'

    def __str__(self):
        return f"{self.user.email} likes {self.car}"
