from .graph_user_profile_skills import GraphUserProfileSkillsPlugin
from .my_ip_address import MyIpAddressPlugin
from .university_finder import UniversityFinderPlugin

__all__ = ['GraphUserProfileSkillsPlugin', 'MyIpAddressPlugin', 'UniversityFinderPlugin']
