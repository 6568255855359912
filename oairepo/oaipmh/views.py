from django.http import HttpResponse
from django.utils.decorators import method_decorator
from django.views.decorators.csrf import csrf_exempt
from django.views.generic.base import View

from oairepo.oaipmh.repository import OaiPmhRepository


@method_decorator(csrf_exempt, name='dispatch')
class OAIPMHView(View):
    CONTENT_TYPE = 'text/xml; charset=utf-8'

    def get(self, request):
        return self.oai_response(dict(request.GET.lists()))

    def post(self, request):
        return self.oai_response(dict(request.POST.lists()))

    def oai_response(self, kwargs):
        repository = OaiPmhRepository.from_settings()
        xml = repository.handle_request(self.request, kwargs)
        return HttpResponse(xml, content_type=self.CONTENT_TYPE)
