"""HTTP API sample stack: Cognito-authorized API Gateway in front of a Lambda."""

import os

from aws_cdk import (
    Stack,
    Duration,
    RemovalPolicy,
    CfnOutput,
    aws_apigatewayv2 as apigw,
    aws_apigatewayv2_integrations as apigw_integrations,
    aws_apigatewayv2_authorizers as apigw_authorizers,
    aws_cognito as cognito,
    aws_lambda as lambda_,
)
from constructs import Construct
from typing import List, Optional

from cdk_constructs import LambdaFunction
from stack_config import StackContext

SAMPLE_LAMBDA_PATH = os.path.join(
    os.path.dirname(os.path.dirname(os.path.abspath(__file__))),
    "..",
    "lambdas",
    "sample",
)


class HttpApiSampleStack(Stack):
    """
    HTTP API sample stack.

    Components:
    - Cognito User Pool with hosted sign-in domain
    - Cognito User Pool Client (authorization code flow only)
    - JWT authorizer bound to the pool and client
    - Sample Lambda function
    - API Gateway HTTP API with a single authorized route (GET /sample)
    """

    def __init__(
        self,
        scope: Construct,
        construct_id: str,
        *,
        context: StackContext,
        env_name: Optional[str] = None,
        **kwargs
    ):
        """
        Initialize HTTP API sample stack.

        Args:
            scope: CDK app
            construct_id: Stack ID
            context: Validated environment context
            env_name: Selected context key (dev/prod), exported to the function
            **kwargs: Additional stack properties
        """
        super().__init__(scope, construct_id, **kwargs)

        self.context = context
        self.env_name = env_name

        # Cognito User Pool & User Pool Client
        self.user_pool = self._create_user_pool(context.cognito.domain_prefix)
        self.user_pool_client = self._create_user_pool_client(
            self.user_pool,
            context.cognito.callback_urls,
            context.cognito.logout_urls,
        )

        # Authorizer
        self.authorizer = self._create_authorizer(self.user_pool, self.user_pool_client)

        # Lambda
        self.sample_function = self._create_function()

        # API Gateway
        self.http_api = self._create_api_gateway(self.sample_function, self.authorizer)

        # Stack outputs
        self._create_outputs()

    def _create_user_pool(self, domain_prefix: str) -> cognito.UserPool:
        """Create Cognito User Pool and its hosted sign-in domain."""
        user_pool = cognito.UserPool(
            self,
            "UserPool",
            self_sign_up_enabled=False,  # Admin creates users
            standard_attributes=cognito.StandardAttributes(
                email=cognito.StandardAttribute(required=True, mutable=True),
                phone_number=cognito.StandardAttribute(required=False),
            ),
            auto_verify=cognito.AutoVerifiedAttrs(email=True),
            sign_in_aliases=cognito.SignInAliases(email=True),
            account_recovery=cognito.AccountRecovery.EMAIL_ONLY,
            removal_policy=RemovalPolicy.DESTROY,
        )

        # Cognito-hosted domain (custom domains are not used)
        self.user_pool_domain = user_pool.add_domain(
            "UserPoolDomain",
            cognito_domain=cognito.CognitoDomainOptions(domain_prefix=domain_prefix),
        )
        return user_pool

    def _create_user_pool_client(
        self,
        user_pool: cognito.UserPool,
        callback_urls: List[str],
        logout_urls: List[str],
    ) -> cognito.UserPoolClient:
        """Create the OAuth client; only the authorization code grant is enabled."""
        return user_pool.add_client(
            "client",
            generate_secret=True,
            o_auth=cognito.OAuthSettings(
                callback_urls=list(callback_urls),
                logout_urls=list(logout_urls) or None,
                scopes=[cognito.OAuthScope.OPENID],
                flows=cognito.OAuthFlows(
                    authorization_code_grant=True,
                    client_credentials=False,
                    implicit_code_grant=False,
                ),
            ),
            auth_flows=cognito.AuthFlow(
                admin_user_password=False,
                custom=False,
                user_password=False,
                user_srp=False,
            ),
        )

    def _create_authorizer(
        self,
        user_pool: cognito.IUserPool,
        user_pool_client: cognito.IUserPoolClient,
    ) -> apigw.IHttpRouteAuthorizer:
        """Create JWT authorizer that accepts tokens issued for the client."""
        return apigw_authorizers.HttpUserPoolAuthorizer(
            "Authorizer",
            user_pool,
            user_pool_clients=[user_pool_client],
        )

    def _create_function(self) -> lambda_.Function:
        """Create the sample Lambda function."""
        environment = {"ENVIRONMENT": self.env_name} if self.env_name else None

        sample_func = LambdaFunction(
            self,
            "SampleFunc",
            handler="handler.handler",
            code=lambda_.Code.from_asset(
                SAMPLE_LAMBDA_PATH,
                exclude=["tests", "__pycache__", "*.pyc"],
            ),
            runtime=lambda_.Runtime.PYTHON_3_12,
            timeout=Duration.minutes(5),
            environment=environment,
            log_retention_days=self.context.log_retention_days,
        )
        return sample_func.function

    def _create_api_gateway(
        self,
        func: lambda_.IFunction,
        authorizer: apigw.IHttpRouteAuthorizer,
    ) -> apigw.HttpApi:
        """Create API Gateway HTTP API with one authorized route."""
        http_api = apigw.HttpApi(self, "SampleHttpApi")

        integration = apigw_integrations.HttpLambdaIntegration(
            "Integration",
            func,
            payload_format_version=apigw.PayloadFormatVersion.VERSION_2_0,
        )

        http_api.add_routes(
            path="/sample",
            methods=[apigw.HttpMethod.GET],
            integration=integration,
            authorizer=authorizer,
        )
        return http_api

    def _create_outputs(self):
        """Create CloudFormation outputs."""
        CfnOutput(
            self,
            "UserPoolId",
            value=self.user_pool.user_pool_id,
            description="Cognito User Pool ID",
        )

        CfnOutput(
            self,
            "UserPoolClientId",
            value=self.user_pool_client.user_pool_client_id,
            description="Cognito User Pool Client ID",
        )

        CfnOutput(
            self,
            "HostedUiBaseUrl",
            value=self.user_pool_domain.base_url(),
            description="Cognito hosted UI base URL",
        )

        CfnOutput(
            self,
            "ApiEndpoint",
            value=self.http_api.api_endpoint,
            description="API Gateway endpoint URL",
        )

        CfnOutput(
            self,
            "SampleUrl",
            value=f"{self.http_api.api_endpoint}/sample",
            description="URL of the GET /sample route",
        )
