"""
Business Logic Layer for storefronts.
"""

from typing import Optional

from aws_lambda_powertools.metrics import MetricUnit
from boto3.dynamodb.conditions import Attr

from marketplace.dal.dynamodb_handler import DALError, DynamoDBHandler
from marketplace.dal.lookup import STOREFRONTS_BY_OWNER, find_by
from marketplace.handlers.utils.errors import ErrorContext, ResourceNotFoundError
from marketplace.handlers.utils.observability import logger, metrics, tracer
from marketplace.logic.aggregation import parse_records
from marketplace.models.account import AccountRole
from marketplace.models.input import CreateStorefrontRequest
from marketplace.models.output import CreateStorefrontOutput, StorefrontListOutput, StorefrontOutput
from marketplace.models.storefront import Storefront
from marketplace.security.auth import UserClaims, require_role


class StorefrontService:
    """Business logic service for storefronts."""

    def __init__(self, storefronts_table_handler: DynamoDBHandler, users_table_handler: DynamoDBHandler):
        self.storefronts_dal = storefronts_table_handler
        self.users_dal = users_table_handler

    def _owner_name(self, claims: UserClaims, context: Optional[ErrorContext]) -> str:
        # Falls back to the token email when the account cannot be read.
        try:
            account = self.users_dal.get_item(key={'userId': claims.user_id}, context=context)
        except DALError as e:
            logger.warning("Could not read owner account", extra={"user_id": claims.user_id, "error": e.error_code})
            return claims.email
        if account and account.get('name'):
            return str(account['name'])
        return claims.email

    def _flag_owner(self, claims: UserClaims, context: Optional[ErrorContext]) -> None:
        try:
            self.users_dal.update_item(
                key={'userId': claims.user_id},
                update_expression='SET hasStorefront = :hasStorefront',
                expression_attribute_values={':hasStorefront': True},
                condition_expression=Attr('userId').exists(),
                context=context,
            )
        except DALError as e:
            if e.error_code != 'DYNAMODB_ConditionalCheckFailedException':
                raise
            logger.warning("Owner account missing, hasStorefront not set", extra={"user_id": claims.user_id})

    @tracer.capture_method
    def create_storefront(
        self,
        claims: UserClaims,
        request: CreateStorefrontRequest,
        context: ErrorContext,
    ) -> CreateStorefrontOutput:
        """
        Create a storefront owned by the caller and flag the caller's account.

        Raises:
            AuthorizationError: If the caller is not a seller
            DALError: If database operation fails
        """
        require_role(claims, AccountRole.SELLER, "Forbidden: Only sellers can create storefronts", context=context)

        storefront = Storefront.create(
            name=request.name,
            description=request.description,
            category=request.category,
            owner=claims.user_id,
            owner_name=self._owner_name(claims, context),
            image=request.image,
        )
        self.storefronts_dal.put_item(item=storefront.to_record(), context=context)
        self._flag_owner(claims, context)

        metrics.add_metric(name="StorefrontCreated", unit=MetricUnit.Count, value=1)
        logger.info("Storefront created", extra={"store_id": storefront.store_id, "owner": claims.user_id})

        return CreateStorefrontOutput(message="Storefront created successfully", storefront=storefront)

    @tracer.capture_method
    def get_storefront(self, store_id: str, context: ErrorContext) -> StorefrontOutput:
        """
        Read one storefront.

        Raises:
            ResourceNotFoundError: If the storefront does not exist
        """
        record = self.storefronts_dal.get_item(key={'storeId': store_id}, context=context)
        if not record:
            raise ResourceNotFoundError(resource_type="Storefront", resource_id=store_id, context=context)
        return StorefrontOutput(storefront=Storefront.model_validate(record))

    @tracer.capture_method
    def list_owned(self, claims: UserClaims, context: ErrorContext) -> StorefrontListOutput:
        """Storefronts owned by the calling seller."""
        require_role(claims, AccountRole.SELLER, "Forbidden: Only sellers can view their storefronts", context=context)

        result = find_by(self.storefronts_dal, STOREFRONTS_BY_OWNER, claims.user_id, context=context)
        return StorefrontListOutput(storefronts=parse_records(result.items, Storefront))

    @tracer.capture_method
    def list_all(self, context: ErrorContext) -> StorefrontListOutput:
        """Every storefront, read with a full scan."""
        records = self.storefronts_dal.scan_items(context=context)
        return StorefrontListOutput(storefronts=parse_records(records, Storefront))
