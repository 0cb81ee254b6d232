from django.apps import AppConfig


class FsaEngineConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'fsa_engine'
    verbose_name = 'Finite state automata engine'
