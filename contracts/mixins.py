# contracts/mixins.py
from rest_framework.decorators import action

from common.responses import ok, web_action
from . import services
from .serializers import ContractDetailSerializer, ContractFlatSerializer, ContractRequestSerializer

CONTRACT_ACTION_OPS = {
    "add_contract_web": "manage_contracts",
    "update_contract_web": "manage_contracts",
    "details_contract_web": "list",
    "contract_web": "list",
    "delete_contract_web": "manage_contracts",
}


class ContractWebMixin:
    """
    Contract screens reached from the owner and lessee pages of the web client.
    All of them answer with the {is_success, message, result} envelope.
    """

    @action(detail=False, methods=["post"], url_path="add-contract-web")
    @web_action
    def add_contract_web(self, request):
        ser = ContractRequestSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        contract = services.create_contract(ser.validated_data)
        data = ContractDetailSerializer(services.get_contract(contract.pk), context=self.get_serializer_context()).data
        return ok(data, "Contract created.")

    @action(detail=False, methods=["post"], url_path="update-contract-web")
    @web_action
    def update_contract_web(self, request):
        ser = ContractRequestSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        contract = services.get_contract(ser.validated_data.get("id"))
        services.update_contract(contract, ser.validated_data)
        data = ContractDetailSerializer(services.get_contract(contract.pk), context=self.get_serializer_context()).data
        return ok(data, "Contract updated.")

    @action(detail=False, methods=["get"], url_path=r"details-contract-web/(?P<contract_id>\d+)")
    @web_action
    def details_contract_web(self, request, contract_id=None):
        contract = services.get_contract(contract_id)
        return ok(ContractDetailSerializer(contract, context=self.get_serializer_context()).data)

    @action(detail=False, methods=["get"], url_path=r"contract-web/(?P<contract_id>\d+)")
    @web_action
    def contract_web(self, request, contract_id=None):
        contract = services.get_contract(contract_id)
        return ok(ContractFlatSerializer(contract, context=self.get_serializer_context()).data)

    @action(detail=False, methods=["get", "delete"], url_path=r"delete-contract-web/(?P<contract_id>\d+)")
    @web_action
    def delete_contract_web(self, request, contract_id=None):
        services.delete_contract(services.get_contract(contract_id))
        return ok(message="Contract deleted.")
