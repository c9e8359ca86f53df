from .native import GraphUserProfileSkillsPlugin, MyIpAddressPlugin, UniversityFinderPlugin

PROMPT_PLUGINS = ['ResumeAssistantPlugin', 'TravelAgentPlugin']

__all__ = [
    'PROMPT_PLUGINS',
    'GraphUserProfileSkillsPlugin',
    'MyIpAddressPlugin',
    'UniversityFinderPlugin',
]
