from django.urls import path
from . import views

urlpatterns = [
    # Dispatch on the definition's type
    path('api/simulate-fsa/', views.simulate_fsa, name='simulate_fsa'),

    # Specific FSA type simulators
    path('api/simulate-dfa/', views.simulate_dfa, name='simulate_dfa'),
    path('api/simulate-nfa/', views.simulate_nfa, name='simulate_nfa'),

    # Subset construction
    path('api/nfa-to-dfa/', views.convert_nfa_to_dfa, name='nfa_to_dfa'),

    # Built-in example automata
    path('api/examples/', views.list_examples, name='list_examples'),
    path('api/examples/<str:name>/execute/', views.execute_example, name='execute_example'),
]
