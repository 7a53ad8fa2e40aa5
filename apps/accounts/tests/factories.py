import factory

from apps.accounts.models import CustomUser

TEST_PASSWORD = 'Str0ng-Test-Pass!'


class UserFactory(factory.django.DjangoModelFactory):
    """Registered user with a known password"""

    class Meta:
        model = CustomUser

    email = factory.Sequence(lambda n: f'user{n}@example.com')
    first_name = factory.Faker('first_name')
    last_name = factory.Faker('last_name')
    is_registered = True

    @classmethod
    def _create(cls, model_class, *args, **kwargs):
        password = kwargs.pop('password', TEST_PASSWORD)
        return model_class.objects.create_user(*args, password=password, **kwargs)


class StaffUserFactory(UserFactory):
    is_staff = True


class PasswordlessUserFactory(factory.django.DjangoModelFactory):
    """Attendee account created by ticket issuance"""

    class Meta:
        model = CustomUser

    email = factory.Sequence(lambda n: f'attendee{n}@example.com')
    first_name = factory.Faker('first_name')
    last_name = factory.Faker('last_name')

    @classmethod
    def _create(cls, model_class, *args, **kwargs):
        return model_class.objects.create_passwordless_user(*args, **kwargs)
