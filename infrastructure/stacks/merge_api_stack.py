"""
CDK Stack for the Character Merge API.
"""
from aws_cdk import (
    Stack,
    Duration,
    RemovalPolicy,
    CfnOutput,
    BundlingOptions,
    aws_dynamodb as dynamodb,
    aws_lambda as lambda_,
    aws_apigateway as apigw,
    aws_logs as logs,
    aws_iam as iam,
)
from constructs import Construct


class MergeApiStack(Stack):
    """
    CDK Stack for the merge API tables, Lambdas and REST API.
    """

    def __init__(
        self,
        scope: Construct,
        construct_id: str,
        config: dict,
        env_name: str,
        jwt_secret: str,
        **kwargs
    ) -> None:
        super().__init__(scope, construct_id, **kwargs)

        self.config = config
        self.env_name = env_name
        self.jwt_secret = jwt_secret
        self.removal_policy = RemovalPolicy.DESTROY if env_name == "dev" else RemovalPolicy.RETAIN

        # Create DynamoDB tables
        self.characters_table = self._create_characters_table()
        self.age_ranges_table = self._create_age_ranges_table()
        self.merged_records_table = self._create_merged_records_table()
        self.cache_table = self._create_cache_table()

        # Create shared Lambda layer
        self.shared_layer = self._create_shared_layer()

        # Create Lambda functions
        self.authorizer_function = self._create_authorizer_function()
        self.store_handler = self._create_store_handler()
        self.merge_handler = self._create_merge_handler()
        self.history_handler = self._create_history_handler()

        # Create REST API
        self.rest_api = self._create_rest_api()

        # Outputs
        self._create_outputs()

    def _create_table(self, construct_id: str, table_name: str, partition_key: str, **kwargs) -> dynamodb.Table:
        return dynamodb.Table(
            self,
            construct_id,
            table_name=f"{table_name}-{self.env_name}",
            partition_key=dynamodb.Attribute(
                name=partition_key,
                type=dynamodb.AttributeType.STRING
            ),
            billing_mode=dynamodb.BillingMode.PAY_PER_REQUEST,
            removal_policy=self.removal_policy,
            **kwargs
        )

    def _create_characters_table(self) -> dynamodb.Table:
        """Create Characters table keyed by name."""
        return self._create_table("CharactersTable", "Characters", "name")

    def _create_age_ranges_table(self) -> dynamodb.Table:
        """Create AgeRanges table."""
        return self._create_table("AgeRangesTable", "AgeRanges", "id")

    def _create_merged_records_table(self) -> dynamodb.Table:
        """Create MergedRecords table with GSI on name."""
        table = self._create_table("MergedRecordsTable", "MergedRecords", "id")

        table.add_global_secondary_index(
            index_name="NameIndex",
            partition_key=dynamodb.Attribute(
                name="name",
                type=dynamodb.AttributeType.STRING
            ),
            projection_type=dynamodb.ProjectionType.ALL,
        )

        return table

    def _create_cache_table(self) -> dynamodb.Table:
        """Create HistoryCache table; DynamoDB TTL removes expired entries eventually."""
        return self._create_table(
            "HistoryCacheTable",
            "HistoryCache",
            "cacheKey",
            time_to_live_attribute="ttl",
        )

    def _create_shared_layer(self) -> lambda_.LayerVersion:
        """Create Lambda Layer with the merge_api package and its dependencies.

        Lambda Layers require a specific directory structure:
        python/merge_api/  <- shared code goes here
        """
        return lambda_.LayerVersion(
            self,
            "SharedLayer",
            layer_version_name=f"merge-api-shared-{self.env_name}",
            code=lambda_.Code.from_asset(
                "..",
                exclude=["cdk.out", "infrastructure", "tests", ".git", "**/__pycache__"],
                bundling=BundlingOptions(
                    image=lambda_.Runtime.PYTHON_3_11.bundling_image,
                    command=[
                        "bash", "-c",
                        "pip install PyJWT -t /asset-output/python && "
                        "cp -r merge_api /asset-output/python/",
                    ],
                ),
            ),
            compatible_runtimes=[lambda_.Runtime.PYTHON_3_11],
            description="Shared libraries for the merge API (repositories, services, utils)",
            removal_policy=self.removal_policy,
        )

    def _common_environment(self) -> dict:
        return {
            "ENV": self.env_name,
            "LOG_LEVEL": self.config.get("logLevel", "INFO"),
            "CHARACTERS_TABLE_NAME": self.characters_table.table_name,
            "AGE_RANGES_TABLE_NAME": self.age_ranges_table.table_name,
            "MERGED_RECORDS_TABLE_NAME": self.merged_records_table.table_name,
            "CACHE_TABLE_NAME": self.cache_table.table_name,
            "CACHE_TTL_SECONDS": str(self.config.get("cacheTtlSeconds", 1800)),
            "CACHE_INVALIDATION_MAX_WORKERS": str(self.config.get("cacheInvalidationMaxWorkers", 10)),
            "ENABLE_METRICS": str(self.config.get("enableMetrics", True)).lower(),
            "METRICS_NAMESPACE": self.config.get("metricsNamespace", "CharacterMergeApi"),
        }

    def _create_function(self, construct_id: str, name: str, directory: str, **kwargs) -> lambda_.Function:
        return lambda_.Function(
            self,
            construct_id,
            function_name=f"merge-api-{name}-{self.env_name}",
            runtime=lambda_.Runtime.PYTHON_3_11,
            handler="handler.lambda_handler",
            code=lambda_.Code.from_asset(f"../lambda/{directory}"),
            layers=[self.shared_layer],
            log_retention=logs.RetentionDays.ONE_WEEK,
            **kwargs
        )

    def _grant_metrics(self, function: lambda_.Function) -> None:
        function.add_to_role_policy(
            iam.PolicyStatement(
                actions=['cloudwatch:PutMetricData'],
                resources=['*']
            )
        )

    def _create_authorizer_function(self) -> lambda_.Function:
        """Create token authorizer function."""
        return self._create_function(
            "AuthorizerFunction",
            "authorizer",
            "authorizer",
            timeout=Duration.seconds(10),
            environment={
                "ENV": self.env_name,
                "JWT_SECRET": self.jwt_secret,
            },
        )

    def _create_store_handler(self) -> lambda_.Function:
        """Create Store Handler function."""
        function = self._create_function(
            "StoreHandler",
            "store",
            "store_handler",
            timeout=Duration.seconds(10),
            environment=self._common_environment(),
        )

        self.characters_table.grant_read_write_data(function)

        return function

    def _create_merge_handler(self) -> lambda_.Function:
        """Create Merge Handler function."""
        function = self._create_function(
            "MergeHandler",
            "merge",
            "merge_handler",
            timeout=Duration.seconds(30),
            memory_size=256,
            environment=self._common_environment(),
        )

        self.characters_table.grant_read_data(function)
        self.age_ranges_table.grant_read_data(function)
        self.merged_records_table.grant_read_write_data(function)
        self.cache_table.grant_read_write_data(function)
        self._grant_metrics(function)

        return function

    def _create_history_handler(self) -> lambda_.Function:
        """Create History Handler function."""
        function = self._create_function(
            "HistoryHandler",
            "history",
            "history_handler",
            timeout=Duration.seconds(30),
            memory_size=256,
            environment=self._common_environment(),
        )

        self.merged_records_table.grant_read_data(function)
        self.cache_table.grant_read_write_data(function)
        self._grant_metrics(function)

        return function

    def _create_rest_api(self) -> apigw.RestApi:
        """Create REST API with the token authorizer on every method."""
        api = apigw.RestApi(
            self,
            "MergeRestApi",
            rest_api_name=f"character-merge-api-{self.env_name}",
            deploy_options=apigw.StageOptions(stage_name=self.env_name),
        )

        authorizer = apigw.TokenAuthorizer(
            self,
            "TokenAuthorizer",
            handler=self.authorizer_function,
            identity_source="method.request.header.Authorization",
            results_cache_ttl=Duration.seconds(0),
        )

        routes = [
            ("almacenar", "POST", self.store_handler),
            ("fusionados", "GET", self.merge_handler),
            ("historial", "GET", self.history_handler),
        ]
        for path, method, function in routes:
            api.root.add_resource(path).add_method(
                method,
                apigw.LambdaIntegration(function),
                authorizer=authorizer,
                authorization_type=apigw.AuthorizationType.CUSTOM,
            )

        return api

    def _create_outputs(self) -> None:
        CfnOutput(self, "ApiUrl", value=self.rest_api.url)
        CfnOutput(self, "AgeRangesTableName", value=self.age_ranges_table.table_name)
        CfnOutput(self, "CacheTableName", value=self.cache_table.table_name)
