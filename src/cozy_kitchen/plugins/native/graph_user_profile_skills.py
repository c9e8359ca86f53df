import json
import logging
from typing import Annotated

from semantic_kernel.functions import kernel_function

logger = logging.getLogger(__name__)


class GraphUserProfileSkillsPlugin:
    """Reads the signed-in user's profile and skills from Microsoft Graph (beta)"""

    def __init__(self, graph_client):
        self.graph_client = graph_client

    @kernel_function(name="GetMyProfile", description="Gets the signed-in user's name, job title and email")
    async def get_my_profile(self) -> Annotated[str, "JSON with displayName, jobTitle and mail"]:
        user = await self.graph_client.me.get()
        if user is None:
            return json.dumps({})
        return json.dumps(
            {
                'displayName': user.display_name,
                'jobTitle': user.job_title,
                'mail': user.mail or user.user_principal_name,
            },
            indent=2,
        )

    @kernel_function(name="GetMySkills", description="Gets the skills listed on the signed-in user's profile")
    async def get_my_skills(self) -> Annotated[str, "Comma separated list of skills"]:
        response = await self.graph_client.me.profile.skills.get()
        entries = response.value if response is not None and response.value else []
        skills = [s.display_name for s in entries if s.display_name]
        logger.info(f"Graph returned {len(skills)} skills")
        return ", ".join(skills)
