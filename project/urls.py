"""oairepo URL Configuration
"""
from django.urls import re_path as url

from oairepo.oaipmh.views import OAIPMHView


urlpatterns = [
    url(r'^oai-pmh/', OAIPMHView.as_view(), name='oai-pmh'),
]
